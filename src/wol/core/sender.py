"""Wake-on-LAN magic packet construction and transmission."""

import logging
import socket
from ipaddress import IPv4Address
from typing import Union

from wol.core.address import HardwareAddress, parse
from wol.core.errors import BroadcastConfigFailed, SocketCreationFailed, TransmitFailed

logger = logging.getLogger(__name__)

DEFAULT_BROADCAST = IPv4Address("255.255.255.255")
DEFAULT_PORT = 60000

SYNC_STREAM = b"\xff" * 6
ADDRESS_REPEAT = 16
PACKET_LENGTH = len(SYNC_STREAM) + ADDRESS_REPEAT * 6


def build_magic_packet(address: HardwareAddress) -> bytes:
    """Six 0xFF bytes followed by the hardware address sixteen times."""
    return SYNC_STREAM + bytes(address) * ADDRESS_REPEAT


def send(
    address: HardwareAddress,
    destination: Union[IPv4Address, str] = DEFAULT_BROADCAST,
    port: int = DEFAULT_PORT,
) -> None:
    """
    Broadcast a single magic packet for ``address``.

    The packet is sent once; Wake-on-LAN has no acknowledgement, so success
    only means the datagram left this host.

    Args:
        address: Target interface's hardware address
        destination: Broadcast IP address (default: 255.255.255.255)
        port: UDP port (default: 60000)

    Raises:
        SocketCreationFailed: If the UDP socket cannot be opened
        BroadcastConfigFailed: If SO_BROADCAST cannot be enabled
        TransmitFailed: If the datagram could not be sent in full
    """
    packet = build_magic_packet(address)
    target = (str(destination), port)

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
    except OSError as exc:
        raise SocketCreationFailed(f"Failed to open socket: {exc}") from exc

    with sock:
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        except OSError as exc:
            raise BroadcastConfigFailed(f"Failed to set socket options: {exc}") from exc

        logger.debug("Sending %d-byte magic packet for %s to %s:%d", len(packet), address, *target)
        try:
            sent = sock.sendto(packet, target)
        except OSError as exc:
            raise TransmitFailed(f"Failed to send packet to {target[0]}:{port}: {exc}") from exc
        if sent != len(packet):
            raise TransmitFailed(
                f"Failed to send packet to {target[0]}:{port}: "
                f"only {sent} of {len(packet)} bytes sent"
            )

    logger.info("Magic packet for %s sent to %s:%d", address, *target)


def wake(
    mac_address: str,
    destination: Union[IPv4Address, str] = DEFAULT_BROADCAST,
    port: int = DEFAULT_PORT,
) -> HardwareAddress:
    """
    Parse ``mac_address`` and send one magic packet for it.

    The address is validated before any socket is opened.

    Returns:
        The parsed hardware address
    """
    address = parse(mac_address)
    send(address, destination, port)
    return address
