from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from genprinter.config import get_config
from genprinter.exceptions import ContractViolationError, GenPrinterError
from genprinter.imports import unvendor
from genprinter.printer import Printer

console = Console()
app = typer.Typer(
    name='genprinter',
    help='Inspect how generated files name and order their imports',
    no_args_is_help=True,
)


def parse_import(spec: str) -> tuple[str | None, str]:
    """Split ``name=path`` into its parts; a bare path has no preferred name."""
    name, sep, path = spec.partition('=')
    if not sep:
        return None, spec
    if not name or not path:
        raise typer.BadParameter(f"expected 'name=path' or 'path', got '{spec}'")
    return name, path


@app.command()
def resolve(
    imports: Annotated[
        list[str],
        typer.Argument(help="Imports in resolution order, as 'name=path' or 'path'"),
    ],
    package: Annotated[
        str, typer.Option('--package', '-p', help='Package name of the file')
    ] = 'main',
    config: Annotated[
        str | None,
        typer.Option('--config', '-c', help='Path to configuration file (YAML)'),
    ] = None,
    table: Annotated[
        bool, typer.Option('--table', help='Also show the alias chosen per import')
    ] = False,
) -> None:
    """Resolve imports the way a generator would and print the file header.

    Examples:
        genprinter resolve fmt example.com/pkg/fmt
        genprinter resolve -p derived errors=github.com/pkg/errors --table
    """
    requested = [parse_import(spec) for spec in imports]

    try:
        printer = Printer(package, get_config(config))
        handles = [printer.new_import(name, path) for name, path in requested]
        aliases = [handle() for handle in handles]
    except ContractViolationError as e:
        console.print(f'[red]Conflict:[/red] {e}')
        raise typer.Exit(1)
    except GenPrinterError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)

    typer.echo(printer.header(), nl=False)

    if table:
        result = Table(title='Resolved imports')
        result.add_column('Requested name')
        result.add_column('Path')
        result.add_column('Alias', style='bold')
        for handle, alias in zip(handles, aliases):
            result.add_row(
                handle.name or '[dim]-[/dim]',
                unvendor(handle.path, printer.config.vendor_marker),
                alias,
            )
        console.print(result)


@app.command()
def version() -> None:
    """Show the version of genprinter."""
    from genprinter import __version__

    console.print(f'genprinter version: {__version__}')


if __name__ == '__main__':
    app()
