from __future__ import annotations
import ipaddress, re, struct

from ..errors import FormatError
from ..models import Address, Mode

_IPV4_HEX = re.compile(r"[0-9A-Fa-f]{8}")
_IPV6_HEX = re.compile(r"[0-9A-Fa-f]{32}")


def swap32(v: int) -> int:
    """Reverse the byte order of a 32-bit value: 0x010000FF -> 0xFF000001."""
    return ((v << 24) & 0xFF000000) | ((v << 8) & 0x00FF0000) | ((v >> 8) & 0x0000FF00) | ((v >> 24) & 0x000000FF)


def decode_ipv4_hex(token: str) -> ipaddress.IPv4Address:
    """Decode the 8-digit address column of /proc/net/{tcp,udp}.

    The kernel prints the in-memory __be32, so on little-endian hosts
    127.0.0.1 shows up as '0100007F'.
    """
    if not _IPV4_HEX.fullmatch(token):
        raise FormatError(token, "8 hex digits")
    return ipaddress.IPv4Address(swap32(int(token, 16)))


def decode_ipv6_hex(token: str) -> ipaddress.IPv6Address:
    """Decode the 32-digit address column of /proc/net/{tcp6,udp6}.

    Four 32-bit words, each printed like an IPv4 address, i.e. byte-swapped.
    """
    if not _IPV6_HEX.fullmatch(token):
        raise FormatError(token, "32 hex digits")
    packed = b"".join(struct.pack("<I", int(token[i:i + 8], 16)) for i in range(0, 32, 8))
    return ipaddress.IPv6Address(packed)


def decode_address(token: str, mode: Mode) -> Address:
    if mode.is_ipv6:
        return decode_ipv6_hex(token)
    return decode_ipv4_hex(token)


def encode_ipv4_hex(addr: ipaddress.IPv4Address) -> str:
    return f"{swap32(int(addr)):08X}"


def encode_ipv6_hex(addr: ipaddress.IPv6Address) -> str:
    return "".join(f"{w:08X}" for w in struct.unpack("<4I", addr.packed))


def encode_address(addr: Address) -> str:
    if isinstance(addr, ipaddress.IPv6Address):
        return encode_ipv6_hex(addr)
    return encode_ipv4_hex(addr)


def parse_address(text: str, mode: Mode) -> Address:
    """Parse a user supplied address ('127.0.0.1', '::1') for the given mode."""
    addr = ipaddress.ip_address(text.strip())
    if isinstance(addr, ipaddress.IPv6Address) != mode.is_ipv6:
        raise ValueError(f"address {text!r} does not belong to mode {mode.value}")
    return addr
