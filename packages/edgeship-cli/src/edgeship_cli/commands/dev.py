"""edgeship dev command - Resolve the local development server.

Resolves where the dev server listens and which upstream host it forwards
to. The address is probed with a single bind; if it is taken the command
fails immediately with the address that was tried.
"""

from __future__ import annotations

import ipaddress

import click

from edgeship_cli.context import get_cli_context
from edgeship_cli.errors import handle_edgeship_error
from edgeship_cli.output import print_json, print_summary, success
from edgeship_core.errors import EdgeshipError
from edgeship_core.server_config import DEFAULT_IP, DEFAULT_PORT, Protocol

PROTOCOL_CHOICES = [p.value for p in Protocol]


class IPAddressType(click.ParamType):
    """Click parameter type for a literal IPv4 or IPv6 address."""

    name = "ip"

    def convert(self, value: object, param: click.Parameter | None, ctx: click.Context | None) -> str:
        try:
            return str(ipaddress.ip_address(str(value)))
        except ValueError:
            self.fail(f"{value!r} is not a valid IP address", param, ctx)


@click.command()
@click.option(
    "-h",
    "--host",
    type=str,
    default=None,
    help=(
        "Host to forward requests to, defaults to tutorial.cloudflareworkers.com "
        "with the upstream protocol."
    ),
)
@click.option(
    "-i",
    "--ip",
    type=IPAddressType(),
    default=None,
    help=f"IP to listen on [default: {DEFAULT_IP}]",
)
@click.option(
    "-p",
    "--port",
    type=click.IntRange(0, 65535),
    default=None,
    help=f"Port to listen on [default: {DEFAULT_PORT}]",
)
@click.option(
    "--local-protocol",
    type=click.Choice(PROTOCOL_CHOICES),
    default=None,
    help="Protocol the dev server listens with [default: http]",
)
@click.option(
    "--upstream-protocol",
    type=click.Choice(PROTOCOL_CHOICES),
    default=None,
    help="Protocol requests are sent to the host with [default: https]",
)
@click.option(
    "--output",
    "output_format",
    type=click.Choice(["json"]),
    default=None,
    help="Print the resolved configuration as JSON.",
)
def dev(
    host: str | None,
    ip: str | None,
    port: int | None,
    local_protocol: str | None,
    upstream_protocol: str | None,
    output_format: str | None,
) -> None:
    """Resolve the local server for developing your script.

    Flags override the ``dev`` block of edgeship.yaml.

    Examples:

        edgeship dev

        edgeship dev --port 8788 --ip 0.0.0.0

        edgeship dev --host example.com --upstream-protocol http
    """
    defaults = get_cli_context().load_settings().dev

    try:
        # Import here to avoid heavy imports at CLI startup
        from edgeship_core.server_config import ServerConfig

        local = Protocol.parse(local_protocol) if local_protocol else defaults.local_protocol
        upstream = (
            Protocol.parse(upstream_protocol) if upstream_protocol else defaults.upstream_protocol
        )
        config = ServerConfig.resolve(
            host=host or defaults.host,
            ip=ip or defaults.ip,
            port=port if port is not None else defaults.port,
            upstream_protocol=upstream or Protocol.HTTPS,
        )
    except EdgeshipError as e:
        handle_edgeship_error(e)

    local = local or Protocol.HTTP

    if output_format == "json":
        print_json(
            {
                "listening_address": config.listening_address,
                "local_protocol": local.value,
                "host": config.host.url,
                "default_host": config.host.is_default,
            }
        )
        return

    print_summary(
        "Dev server",
        [
            ("Listening on", f"{local.value}://{config.listening_address}"),
            ("Forwarding to", config.host.url),
        ],
    )
    success(f"{config.listening_address} is available")
