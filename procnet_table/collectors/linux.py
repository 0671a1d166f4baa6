from __future__ import annotations
import re
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from ..errors import DecodeError, FormatError, TableIOError
from ..models import Address, Entry, Mode
from ..utils.net import decode_address
from ..utils.text import tokenize

# Column positions in /proc/net/{tcp,udp,tcp6,udp6}:
#   sl  local_address rem_address   st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode
COL_LOCAL = 1
COL_REMOTE = 2
COL_STATE = 3
COL_UID = 7
MIN_COLUMNS = COL_UID + 1

HEX_RE = re.compile(r"[+-]?[0-9A-Fa-f]+")
UHEX_RE = re.compile(r"[0-9A-Fa-f]+")
DEC_RE = re.compile(r"[+-]?[0-9]+")

U32_MAX = 0xFFFFFFFF
I32_MIN, I32_MAX = -0x80000000, 0x7FFFFFFF


def parse_u32_hex(token: str) -> int:
    if not UHEX_RE.fullmatch(token):
        raise FormatError(token, "unsigned hex number")
    v = int(token, 16)
    if v > U32_MAX:
        raise FormatError(token, "unsigned 32-bit hex number")
    return v


def parse_i32(token: str, base: int) -> int:
    pattern = HEX_RE if base == 16 else DEC_RE
    kind = "hex" if base == 16 else "decimal"
    if not pattern.fullmatch(token):
        raise FormatError(token, f"{kind} number")
    v = int(token, base)
    if not I32_MIN <= v <= I32_MAX:
        raise FormatError(token, f"signed 32-bit {kind} number")
    return v


def _split_endpoint(token: str, field: str) -> Tuple[str, str]:
    addr, sep, port = token.partition(":")
    if not sep:
        raise DecodeError(field, f"expected '<address>:<port>', got {token!r}")
    return addr, port


def _decode_endpoint(token: str, mode: Mode, field: str) -> Tuple[Address, int]:
    addr_hex, port_hex = _split_endpoint(token, f"{field}_address")
    try:
        addr = decode_address(addr_hex, mode)
    except FormatError as e:
        raise DecodeError(f"{field}_address", str(e)) from e
    try:
        port = parse_u32_hex(port_hex)
    except FormatError as e:
        raise DecodeError(f"{field}_port", str(e)) from e
    return addr, port


def decode_row(tokens: Sequence[str], mode: Mode) -> Entry:
    """Build an Entry from one tokenized table row.

    Columns are taken by fixed position; the sequence number in column 0 is ignored.
    """
    if len(tokens) < MIN_COLUMNS:
        raise DecodeError("row", f"expected at least {MIN_COLUMNS} columns, got {len(tokens)}")

    laddr, lport = _decode_endpoint(tokens[COL_LOCAL], mode, "local")
    raddr, rport = _decode_endpoint(tokens[COL_REMOTE], mode, "remote")
    try:
        state = parse_i32(tokens[COL_STATE], 16)
    except FormatError as e:
        raise DecodeError("connection_state", str(e)) from e
    try:
        uid = parse_i32(tokens[COL_UID], 10)
    except FormatError as e:
        raise DecodeError("uid", str(e)) from e

    return Entry(local_address=laddr, local_port=lport,
                 remote_address=raddr, remote_port=rport,
                 connection_state=state, uid=uid, mode=mode)


def parse_table(lines: Iterable[str], mode: Mode) -> List[Entry]:
    """Decode every data row of a connection table.

    The first line is the header and is always dropped. The first bad row or
    read failure aborts the whole parse.
    """
    result: List[Entry] = []
    it = iter(lines)
    try:
        next(it, None)
        for line_no, line in enumerate(it, start=2):
            tokens = tokenize(line)
            try:
                result.append(decode_row(tokens, mode))
            except DecodeError as e:
                e.at_line(line_no, line.rstrip("\n"))
                raise
    except (OSError, UnicodeDecodeError) as e:
        raise TableIOError(f"cannot read {mode.value} table: {e}") from e
    return result


def read_table(path: str | Path, mode: Mode) -> List[Entry]:
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            return parse_table(f, mode)
    except TableIOError as e:
        e.path = str(p)
        raise
    except DecodeError as e:
        e.in_file(str(p))
        raise
    except OSError as e:
        raise TableIOError(f"cannot read {p}: {e}", path=str(p)) from e
