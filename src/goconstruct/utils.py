import re

camel2snake_pattern = re.compile(r"(?<!^)(?=[A-Z])")


def unquote(literal: str) -> str:
    return literal[1:-1]
