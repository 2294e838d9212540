"""Exceptions raised while parsing addresses and sending magic packets."""


class WolError(Exception):
    """Base class for every failure reported by wol."""


class AddressError(WolError, ValueError):
    """Raised when a hardware address string cannot be decoded."""


class InvalidHexDigit(AddressError):
    """Raised when an octet contains a character outside 0-9a-fA-F."""

    def __init__(self, chunk: str) -> None:
        super().__init__(f"Failed to parse hexadecimal {chunk!r}")
        self.chunk = chunk


class InvalidAddressLength(AddressError):
    """Raised when the decoded address is not exactly six octets."""

    def __init__(self, text: str, length: int) -> None:
        super().__init__(f"{text!r} is not a valid ether address ({length} octets, expected 6)")
        self.text = text
        self.length = length


class SendError(WolError, OSError):
    """Raised when the magic packet could not be put on the wire."""


class SocketCreationFailed(SendError):
    """Raised when the UDP socket cannot be opened."""


class BroadcastConfigFailed(SendError):
    """Raised when SO_BROADCAST cannot be enabled on the socket."""


class TransmitFailed(SendError):
    """Raised when the datagram could not be sent in full."""
