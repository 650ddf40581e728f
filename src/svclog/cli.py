"""CLI commands for svclog.

This module provides a Click-based command for writing structured log
records from shell scripts, cron jobs and container entrypoints.

Example:
    $ svclog emit --service billing "Invoice created" invoice_id=123 paid=true
    $ svclog emit --level ERROR --trace-id 4bf92f35 "Payment failed" reason=declined
    $ SVCLOG_OUTPUT=/var/log/billing.jsonl svclog emit "Nightly run complete"

Environment Variables:
    SVCLOG_LEVEL: Minimum level to emit
    SVCLOG_SERVICE_NAME: Service name on every record
    SVCLOG_OUTPUT: stdout, stderr or a file path
"""

import json
import logging
from typing import Any, List, Optional, Tuple

import click

from svclog.config import LoggerConfig
from svclog.exceptions import ConfigurationError
from svclog.levels import Level
from svclog.manager import LoggerManager
from svclog.tracing import context_value

logger = logging.getLogger(__name__)

LEVEL_NAMES = list(Level.__members__)

_TRACE_KEY = "trace_id"


def _parse_value(raw: str) -> Any:
    """Parse an attribute value as JSON, falling back to the raw string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _parse_attributes(pairs: Tuple[str, ...]) -> List[Any]:
    """Flatten KEY=VALUE arguments into alternating keys and values."""
    args: List[Any] = []
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(
                f"expected KEY=VALUE, got {pair!r}", param_hint="ATTRIBUTES"
            )
        args.extend([key, _parse_value(raw)])
    return args


# =============================================================================
# CLI Group
# =============================================================================


@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Report internal diagnostics (sink or extractor failures) on stderr",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """svclog - structured JSON logging for service processes.

    Available Commands:
        emit      - Write one structured log record
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# =============================================================================
# Emit Command
# =============================================================================


@cli.command()
@click.option(
    "--level", "-l",
    default="INFO",
    type=click.Choice(LEVEL_NAMES, case_sensitive=False),
    help="Severity of the record (default: INFO)",
)
@click.option(
    "--min-level",
    type=click.Choice(LEVEL_NAMES, case_sensitive=False),
    help="Minimum level to emit (default: SVCLOG_LEVEL or INFO)",
)
@click.option(
    "--service", "-s",
    help="Service name (default: SVCLOG_SERVICE_NAME or 'service')",
)
@click.option(
    "--output", "-o",
    help="stdout, stderr or a file path to append to (default: SVCLOG_OUTPUT or stdout)",
)
@click.option(
    "--trace-id",
    help="Trace id to attach to the record",
)
@click.argument("message")
@click.argument("attributes", nargs=-1)
def emit(
    level: str,
    min_level: Optional[str],
    service: Optional[str],
    output: Optional[str],
    trace_id: Optional[str],
    message: str,
    attributes: Tuple[str, ...],
) -> None:
    """Write one structured log record.

    ATTRIBUTES are KEY=VALUE pairs. Values that parse as JSON keep their
    type (port=8080 is a number, ok=true a boolean); anything else is a
    string.
    """
    args = _parse_attributes(attributes)

    config = LoggerConfig.from_env()
    if min_level:
        config.level = min_level.upper()
    if service:
        config.service_name = service
    if output:
        config.output = output
    config.trace_correlation = False

    manager = LoggerManager(config, trace_extractor=context_value(_TRACE_KEY))
    try:
        manager.configure()
    except ConfigurationError as e:
        raise click.ClickException(f"Configuration error: {e}")

    try:
        manager.logger.log(Level.parse(level), {_TRACE_KEY: trace_id}, message, *args)
    finally:
        manager.shutdown()


if __name__ == "__main__":
    cli()
