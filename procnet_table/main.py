from __future__ import annotations
import argparse, logging, sys
from typing import Dict, List, Optional, Sequence

import orjson
import yaml

from .collectors import get_conn
from .config import CFG, init_cfg_from_args
from .errors import ProcNetError
from .models import Entry, FilterCriteria, Mode
from .rules import filter_entries, load_criteria

log = logging.getLogger("procnet_table")

def _port(text: str) -> int:
    try:
        port = int(text, 16) if text.lower().startswith("0x") else int(text, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from None
    if not 0 <= port <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"port out of range: {text!r}")
    return port

def parse_args(argv: Optional[Sequence[str]] = None):
    ap = argparse.ArgumentParser(description='Decode and filter the /proc/net connection tables')
    ap.add_argument('--mode', action='append', choices=[m.value for m in Mode],
                    help='table to read; repeatable (default: tcp)')
    ap.add_argument('--local-address', type=str, default=None,
                    help='only tables of the same address family are searched')
    ap.add_argument('--remote-address', type=str, default=None,
                    help='only tables of the same address family are searched')
    ap.add_argument('--local-port', type=_port, default=None, help='decimal, or hex with a 0x prefix')
    ap.add_argument('--remote-port', type=_port, default=None, help='decimal, or hex with a 0x prefix')
    ap.add_argument('--filters', type=str, default=None, help='YAML/JSON file with a list of filter presets')
    ap.add_argument('--proc-root', type=str, default=None, help='directory holding net/tcp etc. (default: /proc)')
    ap.add_argument('--json', action='store_true', help='print entries as JSON')
    ap.add_argument('-v', '--verbose', action='store_true')
    return ap.parse_args(argv)

def select(cfg: CFG, presets: List[FilterCriteria]) -> List[Entry]:
    """Read the needed tables once each and apply the presets, or the CLI criteria per mode."""
    criteria = presets or cfg.criteria()
    tables: Dict[Mode, List[Entry]] = {}
    selected: Dict[Entry, None] = {}
    for c in criteria:
        if c.mode not in tables:
            tables[c.mode] = get_conn(c.mode, cfg.proc_root)
            log.debug("%s: %d entries", c.mode.value, len(tables[c.mode]))
        selected.update(dict.fromkeys(filter_entries(tables[c.mode], c)))
    return list(selected)

def _endpoint(addr, port: int, v6: bool) -> str:
    return f"[{addr}]:{port}" if v6 else f"{addr}:{port}"

def render_table(entries: List[Entry]) -> str:
    rows = [("MODE", "LOCAL", "REMOTE", "STATE", "UID")]
    for e in entries:
        v6 = e.mode.is_ipv6
        # udp rows reuse the tcp codes (07 = unconnected) but the names would mislead
        state = e.state_name if e.mode in (Mode.TCP, Mode.TCP6) else f"{e.connection_state:02X}"
        rows.append((e.mode.value, _endpoint(e.local_address, e.local_port, v6),
                     _endpoint(e.remote_address, e.remote_port, v6), state, str(e.uid)))
    widths = [max(len(r[i]) for r in rows) for i in range(len(rows[0]))]
    return "\n".join("  ".join(col.ljust(w) for col, w in zip(r, widths)).rstrip() for r in rows)

def render_json(entries: List[Entry]) -> str:
    return orjson.dumps([e.to_dict() for e in entries], option=orjson.OPT_INDENT_2).decode()

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")
    try:
        cfg = init_cfg_from_args(args)
        presets = load_criteria(str(cfg.filters_file)) if cfg.filters_file else []
        entries = select(cfg, presets)
    except ProcNetError as e:
        log.error("%s", e)
        return 1
    except (ValueError, yaml.YAMLError) as e:
        log.error("invalid filter: %s", e)
        return 2

    print(render_json(entries) if cfg.as_json else render_table(entries))
    return 0

if __name__ == '__main__':
    sys.exit(main())
