"""Command line entry point: compile editor graphs into CWL workflows."""

import json
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import click
import yaml

from cwlflow.compiler import compile_graph
from cwlflow.core.cwl_schema import ValidationError
from cwlflow.core.exceptions import CwlflowError
from cwlflow.core.loader import load_graph, load_plugins
from cwlflow.core.settings import SettingsManager

from .commands.settings import settings
from .logging_config import configure_logging


def _fail(message: str) -> NoReturn:
    click.echo(f"cli: {message}", err=True)
    sys.exit(1)


def _serialize(data: Any, output_format: str) -> str:
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
    return json.dumps(data, indent=2) + "\n"


def _format_for_path(path: Path, default: str) -> str:
    if path.suffix in (".yml", ".yaml", ".cwl"):
        return "yaml"
    if path.suffix == ".json":
        return "json"
    return default


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed compiler output")
def cli(verbose: bool) -> None:
    """Compile visual pipeline graphs into CWL workflows."""
    configure_logging(verbose)


@cli.command(name="compile")
@click.argument("graph_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--plugins",
    "-p",
    "plugins_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Plugin catalog (JSON list of plugins)",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the workflow here instead of stdout",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default=None,
    help="Output format (default: from the output file extension, else json)",
)
@click.option("--strict/--no-strict", default=None, help="Fail if a cycle leaves nodes out of the workflow")
@click.option("--validate/--no-validate", default=None, help="Structurally validate the generated workflow")
@click.option(
    "--job-file",
    "job_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the job input values to this file",
)
def compile_command(
    graph_path: Path,
    plugins_path: Path,
    output_path: Optional[Path],
    output_format: Optional[str],
    strict: Optional[bool],
    validate: Optional[bool],
    job_path: Optional[Path],
) -> None:
    """Compile GRAPH_PATH (editor state JSON) into a CWL workflow."""
    current_settings = SettingsManager().load()

    try:
        graph = load_graph(graph_path)
        plugins = load_plugins(plugins_path)
        document = compile_graph(graph, plugins, settings=current_settings, strict=strict, validate=validate)
    except ValidationError as e:
        _fail(f"Generated workflow is invalid: {e}")
    except CwlflowError as e:
        _fail(str(e))

    if output_format is None:
        output_format = _format_for_path(output_path, "json") if output_path else "json"

    rendered = _serialize(document, output_format)
    if output_path:
        output_path.write_text(rendered, encoding="utf-8")
        click.echo(f"Wrote {len(document['steps'])} step(s) to {output_path}", err=True)
    else:
        click.echo(rendered, nl=False)

    if job_path:
        job_format = _format_for_path(job_path, output_format)
        job_path.write_text(_serialize(document["cwlJobInputs"], job_format), encoding="utf-8")
        click.echo(f"Wrote job inputs to {job_path}", err=True)


cli.add_command(settings)


def main() -> None:
    cli()
