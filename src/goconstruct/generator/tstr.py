import re
from typing import Optional

placeholder_pattern = re.compile(r"\$(\w+)")


class tstr:
    """String template whose `$name` placeholders are filled on conversion."""

    def __init__(
        self,
        value: str,
        *,
        content: dict[str, "str|tstr"] = {},
    ):
        self.value: str = value
        self.content: dict[str, "str|tstr"] = dict(content)

    def remove(self, *keys: str):
        if not keys:
            keys = tuple(
                key
                for key in placeholder_pattern.findall(self.value)
                if key not in self.content
            )
        for key in keys:
            self.value = self.value.replace(f"${key}", "")
            self.content.pop(key, None)

    def __setitem__(self, key: str, value: "str|tstr"):
        self.content[key] = value

    def __getitem__(self, key: str) -> Optional["str|tstr"]:
        return self.content.get(key)

    def __str__(self) -> str:
        # single pass, so filled-in text is never scanned for placeholders
        return placeholder_pattern.sub(
            lambda m: str(self.content[m.group(1)])
            if m.group(1) in self.content
            else m.group(0),
            self.value,
        )

    def __repr__(self) -> str:
        return f"tstr('{self.value}')"
