import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from .._analysis.models import AnalysisResult
from ..analysis import analyze_directory
from ..console import print_application_table, print_error, print_notice
from ..exceptions import ConfigurationError
from ..logging_config import logger, set_log_level, set_structured_logging
from ..serialization import (
    DEFAULT_CYCLONEDX_VERSION,
    get_supported_cyclonedx_versions,
    serialize_cyclonedx,
    serialize_json,
)

LOCKGRAPH_VERSION = __version__

OUTPUT_FORMATS = ["table", "json", "cyclonedx"]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_FORMATS = ["text", "json"]

"""

lockgraph reads the poetry.lock of a project (and the pyproject.toml next
to it, when there is one) and prints every locked package with its exact
version, its dependency edges and whether it is a direct or an indirect
dependency. Packages only needed by the `dev` group are left out.

# Configuration
Every option can also be set through the environment; CLI values win:
- LOCKGRAPH_FORMAT: table, json or cyclonedx (default: table)
- LOCKGRAPH_OUTPUT: write the report to this file instead of stdout
- LOCKGRAPH_RECURSIVE: also analyze lock files in subdirectories
- LOCKGRAPH_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR (default: WARNING)
- LOCKGRAPH_LOG_FORMAT: text or json (default: text)

"""


@dataclass
class Config:
    """Configuration settings for a lockgraph run."""

    directory: str = "."
    output_format: str = "table"
    output_file: Optional[str] = None
    recursive: bool = False
    cyclonedx_version: str = DEFAULT_CYCLONEDX_VERSION
    log_level: str = "WARNING"
    log_format: str = "text"

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not Path(self.directory).is_dir():
            raise ConfigurationError(f"Directory does not exist: {self.directory}")

        self.output_format = self.output_format.lower()
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid output format: '{self.output_format}'. Expected one of: {', '.join(OUTPUT_FORMATS)}"
            )

        if self.output_format == "table" and self.output_file:
            raise ConfigurationError("Writing to a file requires the json or cyclonedx format")

        if self.cyclonedx_version not in get_supported_cyclonedx_versions():
            raise ConfigurationError(
                f"Unsupported CycloneDX version: '{self.cyclonedx_version}'. "
                f"Expected one of: {', '.join(get_supported_cyclonedx_versions())}"
            )

        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: '{self.log_level}'. Expected one of: {', '.join(LOG_LEVELS)}"
            )

        self.log_format = self.log_format.lower()
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Invalid log format: '{self.log_format}'. Expected one of: {', '.join(LOG_FORMATS)}"
            )


def evaluate_boolean(value: str) -> bool:
    """
    Evaluate string values as boolean.

    Args:
        value: String value to evaluate

    Returns:
        Boolean result
    """
    return value.lower() in ["true", "yes", "yeah", "1"]


def build_config(
    directory: Optional[str] = None,
    output_format: Optional[str] = None,
    output_file: Optional[str] = None,
    recursive: Optional[bool] = None,
    cyclonedx_version: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> Config:
    """
    Build configuration from CLI values with environment variable fallbacks.

    A CLI value of None means "not given on the command line".

    Returns:
        Config (not yet validated)
    """
    if recursive is None:
        recursive = evaluate_boolean(os.getenv("LOCKGRAPH_RECURSIVE", "false"))

    return Config(
        directory=directory or ".",
        output_format=output_format or os.getenv("LOCKGRAPH_FORMAT", "table"),
        output_file=output_file or os.getenv("LOCKGRAPH_OUTPUT") or None,
        recursive=recursive,
        cyclonedx_version=cyclonedx_version or DEFAULT_CYCLONEDX_VERSION,
        log_level=log_level or os.getenv("LOCKGRAPH_LOG_LEVEL", "WARNING"),
        log_format=log_format or os.getenv("LOCKGRAPH_LOG_FORMAT", "text"),
    )


def render_report(result: AnalysisResult, config: Config) -> Optional[str]:
    """
    Render the analysis result in the configured format.

    Returns:
        The serialized report, or None for the table format which is
        printed directly to the console.
    """
    if config.output_format == "json":
        return serialize_json(result)
    if config.output_format == "cyclonedx":
        return serialize_cyclonedx(result, config.cyclonedx_version)

    for app in result.applications:
        print_application_table(app)
    return None


def run(config: Config) -> AnalysisResult:
    """Analyze the configured directory and write the report."""
    result = analyze_directory(config.directory, recursive=config.recursive)

    if result.is_empty:
        print_notice(f"No parsable lock file found in {config.directory}")

    report = render_report(result, config)
    if report is None:
        return result

    if config.output_file:
        Path(config.output_file).write_text(report + "\n", encoding="utf-8")
        logger.info(f"Report written to {config.output_file}")
    else:
        click.echo(report)
    return result


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("directory", required=False)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default=None,
    help="Report format [env: LOCKGRAPH_FORMAT] (default: table).",
)
@click.option(
    "--output",
    "-o",
    "output_file",
    default=None,
    help="Write the report to this file instead of stdout [env: LOCKGRAPH_OUTPUT].",
)
@click.option(
    "--recursive/--no-recursive",
    default=None,
    help="Also analyze lock files in subdirectories [env: LOCKGRAPH_RECURSIVE].",
)
@click.option(
    "--cyclonedx-version",
    type=click.Choice(get_supported_cyclonedx_versions()),
    default=None,
    help=f"CycloneDX spec version for --format cyclonedx (default: {DEFAULT_CYCLONEDX_VERSION}).",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging verbosity [env: LOCKGRAPH_LOG_LEVEL] (default: WARNING).",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS, case_sensitive=False),
    default=None,
    help="Log record format on stderr [env: LOCKGRAPH_LOG_FORMAT] (default: text).",
)
@click.version_option(version=LOCKGRAPH_VERSION, prog_name="lockgraph")
def cli(
    directory: Optional[str],
    output_format: Optional[str],
    output_file: Optional[str],
    recursive: Optional[bool],
    cyclonedx_version: Optional[str],
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """Rebuild the dependency graph of a Poetry project from its lock file.

    DIRECTORY is the project root (default: current directory).
    """
    config = build_config(
        directory=directory,
        output_format=output_format,
        output_file=output_file,
        recursive=recursive,
        cyclonedx_version=cyclonedx_version,
        log_level=log_level,
        log_format=log_format,
    )

    try:
        config.validate()
    except ConfigurationError as e:
        print_error(str(e))
        sys.exit(1)

    set_log_level(config.log_level)
    set_structured_logging(config.log_format == "json")
    logger.debug(f"lockgraph {LOCKGRAPH_VERSION} running with {config}")

    try:
        run(config)
    except OSError as e:
        print_error(f"Failed to write report: {e}")
        sys.exit(1)
