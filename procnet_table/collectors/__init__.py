from __future__ import annotations
from pathlib import Path
from typing import Iterable, List

from ..config import DEFAULT_PROC_ROOT, PROC_NET_FILES
from ..models import Entry, Mode
from .linux import decode_row, parse_table, read_table


def path_for_mode(mode: Mode, proc_root: str | Path = DEFAULT_PROC_ROOT) -> Path:
    return Path(proc_root) / PROC_NET_FILES[mode]


def get_conn(mode: Mode, proc_root: str | Path = DEFAULT_PROC_ROOT) -> List[Entry]:
    return read_table(path_for_mode(mode, proc_root), mode)


def get_tcp(proc_root: str | Path = DEFAULT_PROC_ROOT) -> List[Entry]:
    return get_conn(Mode.TCP, proc_root)


def get_udp(proc_root: str | Path = DEFAULT_PROC_ROOT) -> List[Entry]:
    return get_conn(Mode.UDP, proc_root)


def get_tcp6(proc_root: str | Path = DEFAULT_PROC_ROOT) -> List[Entry]:
    return get_conn(Mode.TCP6, proc_root)


def get_udp6(proc_root: str | Path = DEFAULT_PROC_ROOT) -> List[Entry]:
    return get_conn(Mode.UDP6, proc_root)


def collect(modes: Iterable[Mode], proc_root: str | Path = DEFAULT_PROC_ROOT) -> List[Entry]:
    entries: List[Entry] = []
    for mode in modes:
        entries.extend(get_conn(mode, proc_root))
    return entries


__all__ = [
    "path_for_mode", "get_conn", "get_tcp", "get_udp", "get_tcp6", "get_udp6",
    "collect", "decode_row", "parse_table", "read_table",
]
