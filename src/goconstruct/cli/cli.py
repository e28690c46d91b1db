import platform
from pathlib import Path

import click
import rich.syntax
from rich.console import Console
from tqdm import tqdm

from .. import __version__
from ..classes import GeneratorConfig
from ..exceptions.exceptions import GenerationError
from ..module import Module, source_files

console = Console()
err_console = Console(stderr=True)


def parse_types(value: str) -> list[str]:
    return [name for name in value.split(",") if name] if value else []


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(
    version=__version__,
    prog_name="goconstruct",
    message=f"%(prog)s, version %(version)s (Python {platform.python_version()})",
)
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-t",
    "--type",
    "types",
    default="",
    envvar="GOCONSTRUCT_TYPE",
    show_default=False,
    help="Comma-separated list of type names; all structs when omitted.",
)
@click.option(
    "--suffix",
    default="_gen",
    show_default=True,
    help="Marker inserted before the extension of generated files.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the generated code instead of writing files.",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Suppress progress and status output.",
)
def cli(
    directory: Path,
    types: str,
    suffix: str,
    dry_run: bool,
    quiet: bool,
) -> None:
    """
    Generate constructors for the structs declared in DIRECTORY's Go files.
    """

    config = GeneratorConfig(types=parse_types(types), suffix=suffix)

    files = source_files(directory)
    if not files:
        if not quiet:
            console.print("[yellow]No files to process[/yellow]")
        return

    generated = []
    try:
        with tqdm(total=len(files), leave=False, disable=quiet) as pbar:
            for path in files:
                pbar.desc = path.name

                mod = Module(path)
                if mod.process(config) is not None:
                    if not dry_run:
                        mod.write()
                    generated.append(mod.generated)

                pbar.update(1)
    except GenerationError as e:
        e.render(err_console)
        raise SystemExit(1)
    except KeyboardInterrupt:
        err_console.print("[red]Generation interrupted by user[/red]")
        raise SystemExit(130)

    for result in generated:
        if dry_run:
            console.rule(str(result.path), style="dim")
            console.print(
                rich.syntax.Syntax(
                    result.code,
                    "go",
                    theme="monokai",
                    background_color="default",
                )
            )
        elif not quiet:
            count = len(result.constructors)
            console.print(
                f"[green]Generated {result.path} "
                f"({count} constructor{'s' if count != 1 else ''})[/green]",
                highlight=False,
                soft_wrap=True,
            )
