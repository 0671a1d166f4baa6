from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .models import Address, FilterCriteria, Mode
from .utils.net import parse_address
from .utils.path import to_abs_path

log = logging.getLogger(__name__)

DEFAULT_PROC_ROOT = Path("/proc")

PROC_NET_FILES = {
    Mode.TCP: "net/tcp",
    Mode.TCP6: "net/tcp6",
    Mode.UDP: "net/udp",
    Mode.UDP6: "net/udp6",
}

# include/net/tcp_states.h
TCP_STATES = {
    1: "ESTABLISHED", 2: "SYN_SENT", 3: "SYN_RECV", 4: "FIN_WAIT1",
    5: "FIN_WAIT2", 6: "TIME_WAIT", 7: "CLOSE", 8: "CLOSE_WAIT",
    9: "LAST_ACK", 10: "LISTEN", 11: "CLOSING", 12: "NEW_SYN_RECV",
}

@dataclass
class CFG:
    proc_root: Path = DEFAULT_PROC_ROOT
    modes: List[Mode] = field(default_factory=lambda: [Mode.TCP])
    local_address: Optional[str] = None
    remote_address: Optional[str] = None
    local_port: Optional[int] = None
    remote_port: Optional[int] = None
    as_json: bool = False
    filters_file: Optional[Path] = None

    def criteria_for(self, mode: Mode) -> FilterCriteria:
        """Criteria built from the command line address/port options for one mode."""
        local: Optional[Address] = parse_address(self.local_address, mode) if self.local_address else None
        remote: Optional[Address] = parse_address(self.remote_address, mode) if self.remote_address else None
        return FilterCriteria(mode=mode, local_address=local, remote_address=remote,
                              local_port=self.local_port, remote_port=self.remote_port)

    def criteria(self) -> List[FilterCriteria]:
        """One criteria per selected mode, leaving out modes whose family the addresses rule out."""
        result: List[FilterCriteria] = []
        for mode in self.modes:
            try:
                result.append(self.criteria_for(mode))
            except ValueError:
                log.debug("skipping %s: address family does not match", mode.value)
        if not result:
            # every mode rejected the addresses; report the first mode's error
            self.criteria_for(self.modes[0])
        return result

def init_cfg_from_args(args) -> CFG:
    cfg = CFG()
    if getattr(args, "proc_root", None):
        cfg.proc_root = to_abs_path(args.proc_root)
        if not cfg.proc_root.is_dir():
            log.warning("--proc-root '%s' not found or not a directory", args.proc_root)
    if getattr(args, "mode", None):
        cfg.modes = list(dict.fromkeys(Mode.from_name(m) for m in args.mode))
    cfg.local_address = getattr(args, "local_address", None)
    cfg.remote_address = getattr(args, "remote_address", None)
    cfg.local_port = getattr(args, "local_port", None)
    cfg.remote_port = getattr(args, "remote_port", None)
    cfg.as_json = bool(getattr(args, "json", False))
    if getattr(args, "filters", None):
        cfg.filters_file = to_abs_path(args.filters)
    return cfg
