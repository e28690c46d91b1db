from dataclasses import dataclass, field


def nodeloc(*nodes):
    return Location(
        line=nodes[0].loc.line,
        col=nodes[0].loc.col,
        end_line=nodes[-1].loc.end_line,
        end_col=nodes[-1].loc.end_col,
    )


@dataclass
class Location:
    line: int = -1
    col: int = -1
    end_line: int = -1
    end_col: int = -1

    def split(self) -> list["Location"]:
        """
        Split a multi-line position span into individual line positions.
        """
        return [
            Location(
                line=line,
                col=self.col if line == self.line else 1,
                end_line=line,
                end_col=-1 if line != self.end_line else self.end_col,
            )
            for line in range(
                self.line, (self.end_line if self.end_line != -1 else self.line) + 1
            )
        ]


@dataclass
class Token:
    type: str
    value: str
    loc: Location = field(default_factory=lambda: Location(), repr=False, compare=False)

    def __bool__(self):
        return True


@dataclass(kw_only=True, frozen=True)
class AstNode:
    loc: Location = field(default_factory=lambda: Location(), repr=False, compare=False)

    def __bool__(self):
        return True


@dataclass(frozen=True)
class Identifier(AstNode):
    name: str

    def __str__(self):
        return self.name
