__version__ = "0.1.0"
__author__ = "goconstruct contributors"
