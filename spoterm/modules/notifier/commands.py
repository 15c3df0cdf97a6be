from typing import Any, List
import click
from pydantic import ValidationError

from .config import NotifierConfig, DEFAULT_ENDPOINT, DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT
from .command.probe import ProbeCommand
from .command.watch import WatchCommand


def _build_config(**options: Any) -> NotifierConfig:
    try:
        return NotifierConfig(**options)
    except ValidationError as err:
        errors = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in err.errors()
        )
        raise click.UsageError(f"Invalid configuration: {errors}")


endpoint_option = click.option(
    "--endpoint",
    default=DEFAULT_ENDPOINT,
    show_default=True,
    envvar="SPOTERM_ENDPOINT",
    help="Metadata URL holding the spot termination time"
)
timeout_option = click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT,
    show_default=True,
    envvar="SPOTERM_TIMEOUT",
    help="Timeout of a single probe in seconds"
)


def create_notifier_commands() -> List[click.Command]:
    """Create the watch and probe commands."""

    @click.command(name="watch")
    @endpoint_option
    @click.option(
        "--interval",
        type=click.FloatRange(min=0, min_open=True),
        default=DEFAULT_POLL_INTERVAL,
        show_default=True,
        envvar="SPOTERM_INTERVAL",
        help="Seconds between probes"
    )
    @timeout_option
    @click.pass_context
    def watch(ctx, endpoint: str, interval: float, timeout: float):
        """Block until the instance is scheduled for termination.

        Exits 0 once the termination time is received, 1 if polling stopped
        on an error, 2 if the metadata endpoint could not be probed at all
        and 130 when interrupted.
        """
        config = _build_config(endpoint=endpoint, poll_interval=interval, timeout=timeout)
        command = WatchCommand(logger=ctx.obj.logger, config=config)
        ctx.exit(command.run())

    @click.command(name="probe")
    @endpoint_option
    @timeout_option
    @click.pass_context
    def probe(ctx, endpoint: str, timeout: float):
        """Check the termination time once."""
        config = _build_config(endpoint=endpoint, timeout=timeout)
        command = ProbeCommand(logger=ctx.obj.logger, config=config)
        ctx.exit(command.run())

    return [watch, probe]
