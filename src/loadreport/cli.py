"""Command-line interface for loadreport."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from loadreport import __version__
from loadreport.reporting import ReportError, create_reporter, write_report
from loadreport.results import ResultsFormatError, load_results
from loadreport.utils.config_validator import (
    ConfigurationError,
    ReportConfig,
    example_config,
    load_report_config,
    validate_config_file,
)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="loadreport")
def cli():
    """loadreport: Summaries, histograms and JSON reports for load-test results."""
    pass


@cli.command()
@click.argument("results_file", type=click.Path(exists=True))
@click.option(
    "--type", "-t", "report_type", default=None,
    help="Report type: text, json or hist[<buckets>] (e.g. 'hist[0,100ms,200ms]')"
)
@click.option(
    "--config", "-c", "config_file", type=click.Path(exists=True), default=None,
    help="Report configuration file (YAML or JSON)"
)
@click.option("--show-urls", is_flag=True, help="List URL counts per bucket")
@click.option(
    "--output", "-o", default="-",
    help="Output file path ('-' for stdout)"
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="WARNING",
    help="Logging level"
)
def report(results_file: str, report_type: Optional[str], config_file: Optional[str],
           show_urls: bool, output: str, log_level: str):
    """Compute and print a report over a results file (.csv or .jsonl)."""
    logging.getLogger().setLevel(getattr(logging, log_level))

    try:
        config = load_report_config(config_file) if config_file else ReportConfig()

        # Command-line flags take precedence over the configuration file
        kind = report_type or config.type
        reporter = create_reporter(
            kind,
            rules=config.buckets,
            show_urls=show_urls or config.show_urls,
            success_policy=config.success_policy,
            histogram_buckets=config.histogram_buckets,
            below_first=config.below_first_boundary,
        )

        results = load_results(results_file)

        if output == "-":
            write_report(reporter, results, sys.stdout.buffer)
        else:
            output_path = Path(output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                with open(output_path, "wb") as f:
                    write_report(reporter, results, f)
            except ReportError:
                output_path.unlink(missing_ok=True)
                raise
            logger.info(f"Report written to {output_path}")

    except (ConfigurationError, ResultsFormatError, ReportError, OSError, ValueError, yaml.YAMLError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--output", "-o", default="report_config.yaml",
    help="Output file path"
)
@click.option(
    "--format", "-f", type=click.Choice(["yaml", "json"]), default="yaml",
    help="Configuration file format"
)
def generate_config(output: str, format: str):
    """Generate an example report configuration file."""
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        if format == "yaml":
            yaml.dump(example_config(), f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(example_config(), f, indent=2)

    click.echo(f"Generated example configuration at {output_path}")


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
def validate(config_file: str):
    """Validate a report configuration file."""
    click.echo(f"Validating configuration: {config_file}")

    try:
        is_valid, errors, _ = validate_config_file(config_file)
    except (OSError, ValueError, yaml.YAMLError) as e:
        click.echo(click.style(f"Error validating configuration: {e}", fg="red"))
        sys.exit(1)

    if is_valid:
        click.echo(click.style("✓ Configuration is valid", fg="green"))
    else:
        click.echo(click.style(f"✗ Configuration has {len(errors)} errors:", fg="red"))
        for i, error in enumerate(errors[:20], 1):
            click.echo(f"  {i}. {error}")
        if len(errors) > 20:
            click.echo(f"  ... and {len(errors) - 20} more errors")

    sys.exit(0 if is_valid else 1)


if __name__ == "__main__":
    cli()
