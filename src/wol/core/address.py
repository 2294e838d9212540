"""Hardware (MAC) address parsing."""

import string
from dataclasses import dataclass

from wol.core.errors import InvalidAddressLength, InvalidHexDigit

ADDRESS_LENGTH = 6
SEPARATOR = ":"

_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class HardwareAddress:
    """A six-octet link-layer address, in the order it was written."""

    octets: bytes

    def __post_init__(self) -> None:
        if len(self.octets) != ADDRESS_LENGTH:
            raise InvalidAddressLength(self.octets.hex(), len(self.octets))

    def __bytes__(self) -> bytes:
        return self.octets

    def __str__(self) -> str:
        return format_address(self)


def _parse_octet(chunk: str) -> int:
    if not chunk or any(c not in _HEX_DIGITS for c in chunk):
        raise InvalidHexDigit(chunk)
    return int(chunk, 16)


def parse(text: str) -> HardwareAddress:
    """
    Decode a textual hardware address.

    The input is read two characters at a time; a single ``:`` after each
    octet is skipped, so both ``AA:BB:CC:DD:EE:FF`` and ``AABBCCDDEEFF`` are
    accepted. The last octet may be a single digit.

    Args:
        text: Address as typed by the user

    Returns:
        The parsed HardwareAddress

    Raises:
        InvalidHexDigit: If an octet contains a non-hexadecimal character
        InvalidAddressLength: If the input does not decode to six octets
    """
    octets = bytearray()
    i = 0
    while i < len(text):
        octets.append(_parse_octet(text[i : i + 2]))
        i += 2
        if i < len(text) and text[i] == SEPARATOR:
            i += 1

    if len(octets) != ADDRESS_LENGTH:
        raise InvalidAddressLength(text, len(octets))
    return HardwareAddress(bytes(octets))


def format_address(address: HardwareAddress) -> str:
    """Render an address as upper-case, colon-separated hex."""
    return SEPARATOR.join(f"{b:02X}" for b in address.octets)
