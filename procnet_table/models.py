from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from typing import Optional, Union

Address = Union[IPv4Address, IPv6Address]


class Mode(Enum):
    TCP = "tcp"
    UDP = "udp"
    TCP6 = "tcp6"
    UDP6 = "udp6"

    @property
    def is_ipv6(self) -> bool:
        return self in (Mode.TCP6, Mode.UDP6)

    @classmethod
    def from_name(cls, name: str) -> "Mode":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"unknown mode {name!r}, expected one of "
                             f"{', '.join(m.value for m in cls)}") from None


@dataclass(frozen=True)
class Entry:
    """One row of /proc/net/{tcp,udp,tcp6,udp6}."""
    local_address: Address
    local_port: int
    remote_address: Address
    remote_port: int
    connection_state: int  # raw kernel code, e.g. 0x0A
    uid: int
    mode: Mode

    @property
    def state_name(self) -> str:
        from .config import TCP_STATES
        return TCP_STATES.get(self.connection_state, "UNKNOWN")

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "local_address": str(self.local_address),
            "local_port": self.local_port,
            "remote_address": str(self.remote_address),
            "remote_port": self.remote_port,
            "state": self.connection_state,
            "state_name": self.state_name,
            "uid": self.uid,
        }


@dataclass
class FilterCriteria:
    mode: Mode
    local_address: Optional[Address] = None
    remote_address: Optional[Address] = None
    local_port: Optional[int] = None
    remote_port: Optional[int] = None
