import logging
import sys
from importlib import metadata
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import click
from appdirs import user_log_dir
from rich.logging import RichHandler

from edgebind.cli.commands import console, run_check, run_transform

app_logger = logging.getLogger("edgebind")
# Set the logger to capture ALL messages from 'edgebind' internally
app_logger.setLevel(logging.DEBUG)

app_name = "edgebind"
log_dir = Path(user_log_dir(app_name))
log_dir.mkdir(parents=True, exist_ok=True)
log_file_path = log_dir / f"{app_name}.log"
file_handler = TimedRotatingFileHandler(
    filename=str(log_file_path), when="D", interval=1, backupCount=7, encoding="utf-8"
)
file_handler.setLevel(logging.DEBUG)
file_formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
file_handler.setFormatter(file_formatter)
app_logger.addHandler(file_handler)

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.option(
    "--verbose", "-v", count=True, help="Increase verbosity. -v for INFO, -vv for DEBUG logs."
)
@click.option("--version", is_flag=True, help="Show edgebind version.")
@click.pass_context
def cli(ctx: click.Context, verbose: int, version: bool) -> None:
    if version:
        _version()  # Exits after printing version

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit(0)

    if verbose > 0:
        console_handler = RichHandler(
            console=console,
            show_time=False,
            show_level=True,
            markup=False,
            tracebacks_suppress=[click],
            rich_tracebacks=True,
        )
        if verbose == 1:
            console_handler.setLevel(logging.INFO)
            console.print("[italic blue]Console verbosity: INFO[/]")
        elif verbose >= 2:  # noqa: PLR2004
            console_handler.setLevel(logging.DEBUG)
            console.print("[italic green]Console verbosity: DEBUG[/]")

        console.print(f"[italic dim]Logs saved to: {log_file_path}[/]")
        app_logger.addHandler(console_handler)


@click.command()
@click.argument("template", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--functions",
    "-f",
    "functions_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with function definitions declaring edgeAssociation.",
)
@click.option("--stage", "-s", default="dev", show_default=True, help="Stage used in export names")
@click.option(
    "--output",
    "-o",
    "output_path",
    default=None,
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write the transformed template here instead of stdout.",
)
@click.option("--role", default=None, help="Logical id of the Lambda execution role")
def transform(
    template: Path, functions_path: Path, stage: str, output_path: Path | None, role: str | None
) -> None:
    """
    Wires Lambda@Edge associations into a compiled CloudFormation template.
    """
    logger.info("Transforming %s with functions from %s", template, functions_path)
    rendered = run_transform(
        template, functions_path, stage=stage, output_path=output_path, role=role
    )
    if output_path is None:
        click.echo(rendered)


@click.command()
@click.argument("functions_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def check(functions_path: Path) -> None:
    """Validates edge association declarations without a template."""
    run_check(functions_path)


@click.command()
def version() -> None:
    """Shows version and exit."""
    _version()


cli.add_command(transform)
cli.add_command(check)
cli.add_command(version)


def _version() -> None:
    edgebind_version = metadata.version("edgebind")
    console.print(f"edgebind version: {edgebind_version}", highlight=False)
    sys.exit(0)
