from . import ast, core

__all__ = ["ast", "core"]
