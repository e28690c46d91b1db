"""Exception handling and formatted error reporting."""

import dataclasses
import textwrap
from importlib import resources
from typing import Optional

import rich.console
import rich.markup

from ..classes import ModuleMeta
from ..nodes.core import AstNode, Location, Token
from . import msgparser


class GenerationError(Exception):
    """
    A fatal error raised while processing one source file.

    Errors propagate out of the per-file pipeline unchanged; the caller decides
    whether to report them and abort.
    """

    def __init__(
        self,
        message: msgparser.ErrorMessage,
        module: ModuleMeta,
        loc: Location | None = None,
    ):
        super().__init__(f"{message.code}: {message.message}")
        self.message = message
        self.module = module
        self.loc = loc

    @property
    def location(self) -> str:
        return f"{self.module.path or '<unknown>'}" + (
            f":{self.loc.line}:{self.loc.col}"
            if self.loc and self.loc.line > 0
            else ""
        )

    def render(self, console: Optional[rich.console.Console] = None) -> None:
        console = console or rich.console.Console(stderr=True)
        message, loc = self.message, self.loc

        # Header
        console.print(
            f"[bold red]{message.type}[/bold red] [dim]at {self.location}[/dim]",
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
        console.print(
            f"  [dim]\\[{message.code}][/dim] {rich.markup.escape(message.message)}",
            highlight=False,
        )

        # Code preview
        source_lines = self.module.source.splitlines()
        if loc and self.module.source and 0 < loc.line <= len(source_lines):
            console.print()

            locs = loc.split()
            for i, line in enumerate(locs):
                if line.line > len(source_lines):
                    break
                src = source_lines[line.line - 1]
                line.end_col = line.end_col if line.end_col > 0 else len(src) + 1
                line.end_col = max(line.end_col, line.col)

                start = max(0, line.col - 30)
                end = min(len(src), line.end_col + 30)

                highlighted = (
                    f"{rich.markup.escape(src[start : line.col - 1])}"
                    f"[red bold]{rich.markup.escape(src[line.col - 1 : line.end_col])}[/red bold]"
                    f"{rich.markup.escape(src[line.end_col : end])}"
                )
                prefix = "..." if start > 0 else ""
                suffix = "..." if end < len(src) else ""

                console.print(
                    f"[dim]{(min(5 - len(str(line.line)), 4) * ' ')}{line.line} │[/dim]   {prefix}{highlighted}{suffix}",
                    highlight=False,
                )

                underline = "─" * (line.end_col - line.col + 1)
                if i == 0:
                    underline = "╰" + underline[1:]
                if i == len(locs) - 1:
                    underline = underline[:-1] + "╯"
                marker = f"{' ' * len(f'{prefix}{src[start : line.col - 1]}')}[red bold]{underline}[/red bold]"

                console.print(
                    f"[dim]      |[/dim]   {marker}",
                    highlight=False,
                )

        if message.help:
            console.print(
                textwrap.indent(f"[dim]{rich.markup.escape(message.help)}[/dim]", "  "),
                highlight=False,
            )

        console.print()


class ParseFailure(GenerationError):
    pass


class RenderFailure(GenerationError):
    pass


class IOFailure(GenerationError):
    pass


KINDS: dict[str, type[GenerationError]] = {
    "ParseFailure": ParseFailure,
    "RenderFailure": RenderFailure,
    "IOFailure": IOFailure,
}


class Exceptions:
    def __init__(self, module: ModuleMeta):
        self.module = module
        with resources.as_file(
            resources.files("goconstruct.exceptions") / "messages.txt"
        ) as messages_path:
            self.codes = msgparser.parse(messages_path)

    def unexpectedToken(self, tok: Token, help: str | None = None):
        if tok.type == "EOF":
            self.unexpectedEOF(loc=tok.loc)
        self.throw(1, token=tok.value, loc=tok.loc, help=help)

    def unexpectedEOF(self, loc: Location | None = None):
        self.throw(2, loc=loc)

    def illegalCharacter(self, tok: Token):
        self.throw(3, char=tok.value, loc=tok.loc)

    def unterminated(self, tok: Token, what: str):
        self.throw(4, what=what, loc=tok.loc)

    def unrenderable(self, node: AstNode):
        self.throw(101, node=type(node).__name__, loc=node.loc)

    def ioFailure(self, action: str, error: OSError):
        self.throw(201, action=action, reason=error.strerror or str(error))

    def throw(
        self, code: int, loc: Location | None = None, help: str | None = None, **kwargs
    ):
        try:
            message = dataclasses.replace(self.codes[f"E{code:03d}"])  # copy
        except KeyError:
            raise ValueError(f"Unknown error code: {code}")

        message.message = message.message.format(**kwargs)
        if help:
            message.help = help

        raise KINDS.get(message.type, GenerationError)(
            message=message, module=self.module, loc=loc
        )
