import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from edgebind.config import EdgeConfig
from edgebind.context import TransformContext, _ContextStore
from edgebind.edge import TemplateTransformer, TransformReport
from edgebind.edge.association import read_function_associations
from edgebind.exceptions import EdgebindError, TemplateFormatError

# Messages go to stderr so the transformed template can be piped from stdout
console = Console(stderr=True)

logger = logging.getLogger(__name__)


def _handle_error(error: EdgebindError) -> None:
    if os.getenv("EDGEBIND_DEBUG", "0") == "1":
        raise error
    console.print(f"[bold red]✗ {type(error).__name__}[/bold red]")
    console.print(f"  {error}", highlight=False, markup=False)
    raise SystemExit(1) from None


def load_json(path: Path) -> Any:
    logger.debug("Reading %s", path)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise TemplateFormatError(f"{path} is not valid JSON: {e}") from e


def load_function_definitions(path: Path) -> dict[str, Any]:
    """Read function declarations from a JSON file.

    Accepts either {"name": {...}} or a serverless-style {"functions": {...}}.
    """
    data = load_json(path)
    if isinstance(data, Mapping) and isinstance(data.get("functions"), Mapping):
        data = data["functions"]
    if not isinstance(data, dict):
        raise TemplateFormatError(f"{path} must contain a mapping of function definitions")
    return data


def _print_report(report: TransformReport) -> None:
    for warning in report.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]", highlight=False)

    if not report.associations:
        console.print("[dim]No edge associations declared.[/dim]")
        return

    table = Table(title="Lambda@Edge associations")
    table.add_column("Function", style="cyan")
    table.add_column("Event type")
    table.add_column("Version")
    table.add_column("Distribution")
    table.add_column("Path pattern")
    for bound in report.associations:
        table.add_row(
            bound.function_name,
            bound.event_type,
            bound.version_logical_id,
            bound.distribution or "[dim]exports only[/dim]",
            bound.path_pattern or ("default" if bound.distribution else ""),
        )
    console.print(table)


def run_transform(
    template_path: Path,
    functions_path: Path,
    *,
    stage: str,
    output_path: Path | None = None,
    role: str | None = None,
) -> str:
    """Transform the template and write it to output_path, or return it as text."""
    try:
        template = load_json(template_path)
        functions = load_function_definitions(functions_path)

        _ContextStore.clear()
        _ContextStore.set(TransformContext(stage=stage))
        transformer = TemplateTransformer(config=EdgeConfig(role_logical_id=role))
        report = transformer.transform(template, functions)
    except EdgebindError as e:
        _handle_error(e)
    finally:
        _ContextStore.clear()

    _print_report(report)

    rendered = json.dumps(template, indent=2)
    if output_path is not None:
        output_path.write_text(rendered + "\n", encoding="utf-8")
        console.print(f"[bold green]✓[/bold green] Wrote {output_path}", highlight=False)
    return rendered


def run_check(functions_path: Path) -> int:
    """Validate edge association declarations without a template.

    Returns:
        Number of declarations checked.
    """
    checked = 0
    try:
        functions = load_function_definitions(functions_path)
        for function_name, definition in functions.items():
            for association in read_function_associations(function_name, definition):
                event_type = association.validate()
                logger.debug("'%s' -> %s is valid", function_name, event_type)
                checked += 1
    except EdgebindError as e:
        _handle_error(e)

    console.print(
        f"[bold green]✓[/bold green] {checked} edge association(s) are valid", highlight=False
    )
    return checked
