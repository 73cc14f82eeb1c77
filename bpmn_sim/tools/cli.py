"""
bpmn-sim CLI Interface

Command-line tool for checking BPMN diagrams: completeness, simulatability
and the paths from the start event.
"""

import json
import logging
import sys
from typing import Any, Dict

import click
from lxml import etree

from bpmn_sim.core.config import LogLevel, ReaderConfig, SimConfig
from bpmn_sim.core.observability import ObservabilityConfig, ObservabilityManager
from bpmn_sim.stages.process_graph_builder import ProcessGraphBuilder
from bpmn_sim.stages.xml_reader import BPMNXmlReader, MarkupError

logger = logging.getLogger(__name__)

EXIT_NOT_SIMULATABLE = 1
EXIT_UNREADABLE = 2


@click.group()
def cli():
    """bpmn-sim - Validate annotated BPMN process diagrams."""
    pass


def _setup(verbose: bool, json_logs: bool) -> SimConfig:
    config = SimConfig.from_env()
    config.verbose = config.verbose or verbose
    config.json_logs = config.json_logs or json_logs
    ObservabilityManager.initialize(ObservabilityConfig.from_sim_config(config))
    return config


def _load(bpmn_file: str, reader_config: ReaderConfig) -> ProcessGraphBuilder:
    try:
        elements = BPMNXmlReader(reader_config).read_file(bpmn_file)
    except (etree.XMLSyntaxError, MarkupError) as e:
        click.echo(f"Error: cannot read {bpmn_file}: {e}", err=True)
        sys.exit(EXIT_UNREADABLE)

    return ProcessGraphBuilder(elements).build_and_handle_errors()


@cli.command()
@click.argument("bpmn_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--recover/--strict",
    default=False,
    help="Recover from malformed XML instead of failing",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Verbose logging output",
)
def check(bpmn_file: str, output_format: str, recover: bool, verbose: bool) -> None:
    """
    Check whether a BPMN diagram is complete and simulatable.

    Exits 0 when simulatable, 1 when not, 2 when the file is not readable XML.

    \b
    Examples:
        bpmn-sim check diagram.bpmn
        bpmn-sim check diagram.bpmn --format json
    """
    config = _setup(verbose, json_logs=output_format == "json")
    config.reader.recover = recover

    builder = _load(bpmn_file, config.reader)
    report = builder.report()
    report["file"] = bpmn_file

    if output_format == "json":
        click.echo(json.dumps(report, indent=2))
    else:
        _output_text(report)

    if not report["simulatable"]:
        sys.exit(EXIT_NOT_SIMULATABLE)


@cli.command()
@click.argument("bpmn_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Verbose logging output",
)
def paths(bpmn_file: str, verbose: bool) -> None:
    """List every path from the start event, one per line."""
    config = _setup(verbose, json_logs=False)
    builder = _load(bpmn_file, config.reader)

    if builder.error is not None:
        click.echo(f"Error: {builder.error.message}", err=True)
        sys.exit(EXIT_NOT_SIMULATABLE)

    for path in builder.paths():
        click.echo(" -> ".join(node.display_name for node in path))


@cli.command()
def info() -> None:
    """Show version and supported element kinds."""
    from bpmn_sim import __version__
    from bpmn_sim.models.nodes import NODE_TYPES
    from bpmn_sim.stages.process_graph_builder import IGNORED_ELEMENT_KINDS, SEQUENCE_FLOW

    info_dict = {
        "name": "bpmn-sim",
        "version": __version__,
        "element_kinds": sorted(NODE_TYPES) + [SEQUENCE_FLOW],
        "ignored_kinds": sorted(IGNORED_ELEMENT_KINDS),
        "log_levels": [level.value for level in LogLevel],
    }
    click.echo(json.dumps(info_dict, indent=2))


# ==================
# Helper Functions
# ==================


def _output_text(report: Dict[str, Any]) -> None:
    """Output results as plain text."""
    click.echo(f"File: {report['file']}")
    click.echo(f"Complete: {'yes' if report['complete'] else 'no'}")
    click.echo(f"Simulatable: {'yes' if report['simulatable'] else 'no'}")

    if report["reason"]:
        click.echo(f"Reason: {report['reason']}")

    if report["paths"]:
        click.echo(f"Paths: {len(report['paths'])}")
        for path in report["paths"]:
            click.echo("  " + " -> ".join(path))


if __name__ == "__main__":
    cli()
