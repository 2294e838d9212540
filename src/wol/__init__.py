"""wol: send Wake-on-LAN magic packets from the command line."""

__version__ = "1.0.0"
