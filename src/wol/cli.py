"""Command-line interface for wol."""

import ipaddress
import logging
import re
import sys
from pathlib import Path
from typing import Any, Optional

import click

from wol import __version__
from wol.core.errors import WolError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path.home() / ".config" / "wol" / "config.yaml"

_OCTAL_RE = re.compile(r"^0[0-7]+$")
_LEADING_ZERO_RE = re.compile(r"^0[0-9]+$")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )


class BroadcastAddress(click.ParamType):
    """Dotted-quad IPv4 broadcast address."""

    name = "bcast"

    def convert(
        self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]
    ) -> ipaddress.IPv4Address:
        if isinstance(value, ipaddress.IPv4Address):
            return value
        try:
            return ipaddress.IPv4Address(value)
        except ValueError:
            self.fail(f"{value!r} is not an IPv4 address", param, ctx)


class Port(click.ParamType):
    """UDP port; accepts decimal, 0x hex and 0-prefixed octal like strtol(3) with base 0."""

    name = "port"

    def convert(self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]) -> int:
        if isinstance(value, int):
            port = value
        else:
            text = str(value).strip()
            if _OCTAL_RE.match(text):
                port = int(text, 8)
            elif _LEADING_ZERO_RE.match(text):
                self.fail(f"{value!r} is not a valid octal number", param, ctx)
            else:
                try:
                    port = int(text, 0)
                except ValueError:
                    self.fail(f"{value!r} is not an integer", param, ctx)
        if not 0 <= port <= 65535:
            self.fail(f"{port} is not in the range 0-65535", param, ctx)
        return port


class WolCommand(click.Command):
    """Command that exits with status 1 on usage errors instead of click's 2."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise


def _print_usage(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(ctx.get_help(), err=True)
    ctx.exit(1)


def _resolve(
    dest: str,
    broadcast: Optional[ipaddress.IPv4Address],
    port: Optional[int],
    config: Optional[str],
) -> tuple[str, ipaddress.IPv4Address, int]:
    """
    Work out the MAC, broadcast address and port to use for ``dest``.

    Explicit flags win over a named host's settings, which win over the
    config file's defaults, which win over the built-in defaults.
    """
    from wol.config.loader import read_host_book
    from wol.core.sender import DEFAULT_BROADCAST, DEFAULT_PORT

    path = Path(config) if config else DEFAULT_CONFIG
    book = read_host_book(path, required=config is not None)

    mac = dest
    host_broadcast, host_port = book.broadcast, book.port
    host = book.lookup(dest)
    if host is not None:
        logger.debug("Resolved host %s to %s", dest, host.mac_address)
        mac = host.mac_address
        if host.broadcast is not None:
            host_broadcast = host.broadcast
        if host.port is not None:
            host_port = host.port

    if broadcast is None:
        broadcast = ipaddress.IPv4Address(host_broadcast) if host_broadcast else DEFAULT_BROADCAST
    if port is None:
        port = host_port if host_port is not None else DEFAULT_PORT
    return mac, broadcast, port


@click.command(cls=WolCommand, context_settings={"help_option_names": []})
@click.version_option(version=__version__, prog_name="wol")
@click.option(
    "-h",
    "--help",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_print_usage,
    help="Show this message and exit.",
)
@click.option("--quiet", "-q", is_flag=True, help="Do not report the sent packet")
@click.option(
    "--broadcast",
    "-b",
    type=BroadcastAddress(),
    default=None,
    help="Broadcast address  [default: 255.255.255.255]",
)
@click.option("--port", "-p", type=Port(), default=None, help="UDP port  [default: 60000]")
@click.option(
    "--config",
    "-c",
    default=None,
    envvar="WOL_CONFIG",
    help=f"Path to a YAML host book  [default: {DEFAULT_CONFIG}]",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.argument("dest")
def main(
    dest: str,
    quiet: bool,
    broadcast: Optional[ipaddress.IPv4Address],
    port: Optional[int],
    config: Optional[str],
    verbose: bool,
) -> None:
    """Wake the machine DEST, given as a MAC address or a host name from the config file."""
    _setup_logging(verbose)

    from wol.core.sender import wake

    try:
        mac, broadcast, port = _resolve(dest, broadcast, port, config)
        wake(mac, broadcast, port)
    except WolError as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)

    if not quiet:
        target = dest if mac == dest else f"{dest} ({mac})"
        click.echo(f"Packet sent to {int(broadcast):08X}-{target} on port {port}")


if __name__ == "__main__":
    main()
