"""edgeship tail command - Build a log tail session for a published script.

Validates the tail filters and prints the session request the tail client
registers with the platform.
"""

from __future__ import annotations

import click
from pydantic import ValidationError as PydanticValidationError

from edgeship_cli.context import get_cli_context
from edgeship_cli.errors import CLIError, format_pydantic_error
from edgeship_cli.output import print_json, print_summary
from edgeship_core.errors import EdgeshipError
from edgeship_core.tail import TailFormat, TailOptions, parse_ip_address


def _ip_address_callback(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> tuple[str, ...]:
    """Reject --ip-address values that are neither "self" nor an IP."""
    for address in value:
        try:
            parse_ip_address(address)
        except EdgeshipError as e:
            raise click.BadParameter(e.user_message, ctx=ctx, param=param) from None
    return value


@click.command()
@click.argument("name", required=False)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice([f.value for f in TailFormat]),
    default=TailFormat.JSON.value,
    show_default=True,
    help="Output format for log messages",
)
@click.option(
    "--once",
    is_flag=True,
    default=False,
    help="Stops the tail after receiving the first log (useful for testing)",
)
@click.option(
    "--sampling-rate",
    type=float,
    default=1.0,
    show_default=True,
    help="Adds a sampling rate (0.01 for 1%)",
)
@click.option(
    "--status",
    multiple=True,
    type=click.Choice(["ok", "error", "canceled"]),
    help="Filter by invocation status",
)
@click.option("--method", multiple=True, help="Filter by HTTP method")
@click.option("--header", multiple=True, help="Filter by HTTP header (NAME or NAME:VALUE)")
@click.option(
    "--ip-address",
    multiple=True,
    callback=_ip_address_callback,
    help='Filter by IP address ("self" to filter your own IP address)',
)
@click.option("--search", type=str, default=None, help="Filter by a text match in console.log messages")
def tail(
    name: str | None,
    output_format: str,
    once: bool,
    sampling_rate: float,
    status: tuple[str, ...],
    method: tuple[str, ...],
    header: tuple[str, ...],
    ip_address: tuple[str, ...],
    search: str | None,
) -> None:
    """View a stream of logs from a published script.

    NAME defaults to the script name in edgeship.yaml.

    Examples:

        edgeship tail

        edgeship tail chat --status error --method POST

        edgeship tail chat --ip-address self --sampling-rate 0.1
    """
    script_name = name or get_cli_context().load_settings().name

    try:
        options = TailOptions(
            script_name=script_name,
            format=TailFormat(output_format),
            once=once,
            sampling_rate=sampling_rate,
            status=list(status),
            method=list(method),
            header=list(header),
            ip_address=list(ip_address),
            search=search,
        )
    except PydanticValidationError as e:
        raise CLIError(f"Invalid tail options:\n{format_pydantic_error(e)}") from None

    filters = options.filters()

    if output_format == TailFormat.JSON.value:
        print_json({"script": options.script_name, "once": options.once, "filters": filters})
        return

    print_summary(
        f"Tail for {options.script_name}",
        [("Once", "yes" if options.once else "no")]
        + [(next(iter(f)), str(next(iter(f.values())))) for f in filters],
    )
