"""YAML host book loader and validator."""

import ipaddress
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from wol.core.address import parse
from wol.core.errors import AddressError, WolError

logger = logging.getLogger(__name__)


class ConfigError(WolError):
    """Raised for an unreadable or invalid configuration file."""


@dataclass
class HostEntry:
    """A named machine that can be woken by name instead of by MAC."""

    name: str
    mac_address: str
    broadcast: Optional[str] = None
    port: Optional[int] = None


@dataclass
class HostBook:
    """Named hosts plus the file-wide broadcast and port defaults."""

    hosts: list[HostEntry] = field(default_factory=list)
    broadcast: Optional[str] = None
    port: Optional[int] = None

    def lookup(self, name: str) -> Optional[HostEntry]:
        return next((h for h in self.hosts if h.name == name), None)


def load_config(path: Path) -> Optional[dict[str, Any]]:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML config file

    Returns:
        Parsed configuration dictionary, or None if file is empty

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    with open(path) as f:
        result: Optional[dict[str, Any]] = yaml.safe_load(f)
        return result


def _port_error(value: Any) -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, int):
        return f"port must be an integer, got {value!r}"
    if not 0 <= value <= 65535:
        return f"port {value} out of range 0-65535"
    return None


def _broadcast_error(value: Any) -> Optional[str]:
    try:
        ipaddress.IPv4Address(str(value))
    except ValueError:
        return f"invalid broadcast address '{value}'"
    return None


def _destination_errors(section: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    if "broadcast" in section:
        msg = _broadcast_error(section["broadcast"])
        if msg:
            errors.append(msg)
    if "port" in section:
        msg = _port_error(section["port"])
        if msg:
            errors.append(msg)
    return errors


def validate_config(config: Any) -> list[str]:
    """
    Validate a loaded configuration dictionary.

    Returns:
        List of validation error messages (empty list = valid)
    """
    if not isinstance(config, dict):
        return ["Config root must be a YAML mapping"]

    errors: list[str] = []

    defaults = config.get("defaults") or {}
    if not isinstance(defaults, dict):
        errors.append("'defaults' must be a mapping")
    else:
        errors.extend(f"defaults: {msg}" for msg in _destination_errors(defaults))

    hosts = config.get("hosts") or []
    if not isinstance(hosts, list):
        errors.append("'hosts' must be a list")
        return errors

    seen: set[str] = set()
    for i, host in enumerate(hosts):
        prefix = f"hosts[{i}]"
        if not isinstance(host, dict):
            errors.append(f"{prefix}: must be a mapping")
            continue
        for key in ("name", "mac_address"):
            if not host.get(key):
                errors.append(f"{prefix}: missing required field '{key}'")
        name = str(host.get("name") or "")
        if name:
            if name in seen:
                errors.append(f"{prefix}: duplicate host name '{name}'")
            seen.add(name)
        mac = host.get("mac_address")
        if mac and not isinstance(mac, str):
            errors.append(f"{prefix}: mac_address must be a quoted string, got {mac!r}")
        elif mac:
            try:
                parse(mac)
            except AddressError:
                errors.append(f"{prefix}: invalid mac_address '{mac}'")
        errors.extend(f"{prefix}: {msg}" for msg in _destination_errors(host))

    return errors


def hosts_from_config(config: dict[str, Any]) -> list[HostEntry]:
    """
    Construct HostEntry objects from a validated config dict.

    Args:
        config: Parsed and validated config dictionary

    Returns:
        List of HostEntry instances, in file order
    """
    hosts: list[HostEntry] = []
    for raw in config.get("hosts") or []:
        broadcast = raw.get("broadcast")
        hosts.append(
            HostEntry(
                name=str(raw["name"]),
                mac_address=str(raw["mac_address"]),
                broadcast=str(broadcast) if broadcast is not None else None,
                port=raw.get("port"),
            )
        )
    return hosts


def book_from_config(config: dict[str, Any]) -> HostBook:
    """Build a HostBook from a validated config dict."""
    defaults = config.get("defaults") or {}
    broadcast = defaults.get("broadcast")
    return HostBook(
        hosts=hosts_from_config(config),
        broadcast=str(broadcast) if broadcast is not None else None,
        port=defaults.get("port"),
    )


def read_host_book(path: Path, required: bool = False) -> HostBook:
    """
    Load, validate and convert a host book in one step.

    A missing or empty file yields an empty book unless ``required`` is set,
    in which case a missing file is an error.

    Raises:
        ConfigError: If the file is required but missing, unreadable, or invalid
    """
    if not path.exists():
        if required:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("No config file at %s", path)
        return HostBook()

    try:
        raw = load_config(path)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    if not raw:
        logger.debug("Config file %s is empty", path)
        return HostBook()

    errors = validate_config(raw)
    if errors:
        raise ConfigError(f"Invalid config file {path}: " + "; ".join(errors))
    book = book_from_config(raw)
    logger.debug("Loaded %d host(s) from %s", len(book.hosts), path)
    return book
