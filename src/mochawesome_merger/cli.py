"""
Command-line interface for the mochawesome report merger.
"""

import json
import logging
import sys
from typing import Optional, Tuple

import click

from .config import REPORT_FORMATS, ConfigurationError, load_config, validate_config
from .exceptions import InputValidationError, ReportMergeError
from .merger import merge_reports
from .reporting import ConsoleReporter, JSONReporter, JUnitReporter
from .storage import ReportReader, ReportWriter

logger = logging.getLogger(__name__)


@click.command()
@click.argument("sources", nargs=-1)
@click.option(
    "--output",
    "-o",
    type=str,
    help="Path of the merged report (overrides config)",
)
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to configuration file (YAML)",
)
@click.option(
    "--report-format",
    type=click.Choice(REPORT_FORMATS),
    help="Output format (overrides config)",
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    help="Indent the JSON output by this many spaces",
)
@click.option(
    "--summary/--no-summary",
    default=None,
    help="Print a summary of the merged statistics",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="WARNING",
    help="Logging level",
)
def main(
    sources: Tuple[str, ...],
    output: Optional[str],
    config: Optional[str],
    report_format: Optional[str],
    indent: Optional[int],
    summary: Optional[bool],
    log_level: str,
) -> None:
    """
    Mochawesome Merge - combine mochawesome reports from parallel test shards.

    Examples:

      # Merge three shard reports
      mochawesome-merge shard-1.json shard-2.json shard-3.json -o report.json

      # Sources and output from a config file
      mochawesome-merge --config merge.yaml

      # Fetch shard reports from an artifact store, emit JUnit XML
      mochawesome-merge https://ci.example.com/a.json https://ci.example.com/b.json \\
          --report-format junit -o merged.xml
    """
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    try:
        merge_config = load_config(config)

        if sources:
            merge_config.sources = list(sources)
        if output:
            merge_config.output = output
        if report_format:
            merge_config.report_format = report_format
        if indent is not None:
            merge_config.indent = indent
        if summary is not None:
            merge_config.summary = summary

        errors = validate_config(merge_config)
        if errors:
            click.echo("Configuration errors:", err=True)
            for error in errors:
                click.echo(f"  - {error}", err=True)
            sys.exit(1)

        if merge_config.report_format == "junit":
            generator = JUnitReporter()
        else:
            generator = JSONReporter(indent=merge_config.indent)
        writer = ReportWriter(generator)

        with ReportReader(
            timeout=merge_config.timeout_seconds,
            auth_token=merge_config.auth_token,
        ) as reader:
            merge_reports(merge_config.sources, merge_config.output, reader=reader, writer=writer)

        click.echo(
            f"Merged {len(merge_config.sources)} reports into: {merge_config.output}"
        )
        if merge_config.summary and writer.last_report is not None:
            click.echo(ConsoleReporter().generate(writer.last_report))

    except InputValidationError as e:
        logger.error("Invalid input: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error("File not found: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except json.JSONDecodeError as e:
        logger.error("Malformed report: %s", e)
        click.echo(f"Error: report is not valid JSON: {e}", err=True)
        sys.exit(1)
    except ReportMergeError as e:
        logger.error("Merge failed: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        logger.error("I/O error: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
