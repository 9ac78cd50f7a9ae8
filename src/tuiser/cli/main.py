"""tuiser CLI - interactive serial terminal monitor."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError

from tuiser.cli.args import parse_startup_args
from tuiser.config import AppConfig
from tuiser.exceptions import TuiserError
from tuiser.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

OPTIONS_HELP = """\b
Session options (handled inside the terminal UI):
    -b | --baud <baud>     Set baud
    -d | --device <path>   Set device path
    -m | --mode <mode>     Set monitor mode: char (default), graph, hex, uint, int
    -r | --read            Immediately read device (specified with -d)
    -n | --no-read         (Default) Opposite of -r

-h, --help, --log-file, --debug and --json-logs are read by tuiser itself
wherever they appear, so they cannot be the value of -d, -b or -m.
"""


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "value"
    return f"{field}: {error['msg']}"


@click.command(
    epilog=OPTIONS_HELP,
    context_settings={
        "ignore_unknown_options": True,
        "help_option_names": ["-h", "--help"],
    },
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write logs to this file (default: $TUISER_LOG_FILE, else no logs)",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Write logs as JSON lines")
@click.argument("session_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(
    ctx: click.Context,
    log_file: Path | None,
    debug: bool,
    json_logs: bool,
    session_args: tuple[str, ...],
) -> None:
    """tuiser - configure, open and monitor a serial device.

    Ctrl-WASD selects an input, Enter submits it, Ctrl-Z changes the monitor
    mode, Ctrl-X toggles the monitor and Ctrl-C exits.
    """
    from tuiser.core.app import main as run_app

    try:
        config = AppConfig.resolve(log_file=log_file, debug=debug, json_logs=json_logs or None)
    except ValidationError as exc:
        click.echo(f"ERROR: invalid configuration: {_first_error(exc)}", err=True)
        ctx.exit(1)
    try:
        setup_logging(level=config.log_level, json_output=config.json_logs, log_file=config.log_file)
    except (OSError, ValueError) as exc:
        click.echo(f"ERROR: cannot set up logging: {exc}", err=True)
        ctx.exit(1)

    startup = parse_startup_args(session_args)
    logger.info("tuiser_starting", args=list(session_args))

    try:
        run_app(config, startup)
    except TuiserError as exc:
        logger.error("tuiser_fatal", error=str(exc))
        click.echo(f"ERROR: {exc}", err=True)
        ctx.exit(1)
    except MemoryError:
        logger.error("tuiser_out_of_memory")
        click.echo("ERROR: out of memory", err=True)
        ctx.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
