"""Command-line interface for benchmeter."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from benchmeter.exporters import EXPORTER_NAMES
from benchmeter.measurements import MEASUREMENT_TYPE_DEFAULT, configure_measurements, get_measurements
from benchmeter.orchestration import BenchmarkOrchestrator
from benchmeter.utils.config_validator import load_config_file, validate_and_fix_config

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


@click.group()
@click.version_option(version="0.1.0", prog_name="benchmeter")
def cli():
    """benchmeter: per-operation latency and return-code measurements."""
    pass


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
@click.option(
    "--exporter", "-e", type=click.Choice(EXPORTER_NAMES), default=None,
    help="Override the configured exporter"
)
@click.option(
    "--output", "-o", default=None,
    help="Override the configured export path (stdout when unset)"
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    help="Logging level"
)
def run(config_file: str, exporter: Optional[str], output: Optional[str], log_level: str):
    """Run a synthetic workload and export its measurements."""
    logging.getLogger().setLevel(getattr(logging, log_level))

    click.echo(f"Loading configuration from {config_file}...", err=True)

    try:
        config = load_config_file(config_file)
        if isinstance(config, dict):
            export_config = dict(config.get("export") or {})
            if exporter is not None:
                export_config["exporter"] = exporter
            if output is not None:
                export_config["output"] = output
            config["export"] = export_config

        configure_measurements(config.get("measurements") if isinstance(config, dict) else None)
        orchestrator = BenchmarkOrchestrator(config, measurements=get_measurements())

        click.echo("Starting workload...", err=True)
        report = orchestrator.run()

        workload = report["workload"]
        click.echo("\nBenchmark completed!", err=True)
        click.echo(f"Operations: {workload['operations']} ({workload['failures']} failed)", err=True)
        click.echo(f"Throughput: {workload['operations_per_second']:.1f} ops/s", err=True)
        click.echo(f"Summary: {report['summary']}", err=True)

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--output", "-o", default="example_config.yaml",
    help="Output file path"
)
@click.option(
    "--format", "-f", type=click.Choice(["yaml", "json"]), default="yaml",
    help="Configuration file format"
)
def generate_config(output: str, format: str):
    """Generate an example configuration file."""
    example_config = {
        "measurements": {
            "measurementtype": MEASUREMENT_TYPE_DEFAULT,
            "histogram_buckets": 1000,
            "timeseries_granularity": 1000,
        },
        "workload": {
            "threads": 4,
            "operation_count": 10000,
            "random_seed": 42,
            "failure_probability": 0.01,
            "operations": {
                "READ": 0.5,
                "UPDATE": 0.3,
                "INSERT": 0.2,
            },
            "latency_us_dist_config": {
                "type": "LogNormal",
                "mean": 6.5,
                "sigma": 0.6,
                "is_int": True,
            },
        },
        "export": {
            "exporter": "text",
            "output": "results/measurements.txt",
        },
    }

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if format == "yaml":
        import yaml
        with open(output_path, "w") as f:
            yaml.dump(example_config, f, default_flow_style=False, sort_keys=False)
    else:
        import json
        with open(output_path, "w") as f:
            json.dump(example_config, f, indent=2)

    click.echo(f"Generated example configuration at {output_path}")


@cli.command()
@click.argument("config_file", type=click.Path(exists=True))
def validate(config_file: str):
    """Validate a configuration file without running the workload."""
    click.echo(f"Validating configuration: {config_file}")

    try:
        is_valid, errors, _ = validate_and_fix_config(config_file)

        if is_valid:
            click.echo(click.style("✓ Configuration is valid", fg="green"))
        else:
            click.echo(click.style(f"✗ Configuration has {len(errors)} errors:", fg="red"))
            for i, error in enumerate(errors[:20], 1):
                click.echo(f"  {i}. {error}")
            if len(errors) > 20:
                click.echo(f"  ... and {len(errors) - 20} more errors")

        sys.exit(0 if is_valid else 1)

    except Exception as e:
        click.echo(click.style(f"Error validating configuration: {e}", fg="red"))
        sys.exit(1)


if __name__ == "__main__":
    cli()
