from __future__ import annotations
import json
import logging
from typing import Iterable, List, Optional

import yaml

from .models import Entry, FilterCriteria, Mode
from .utils.net import parse_address
from .utils.path import to_abs_path

log = logging.getLogger(__name__)

CRITERIA_KEYS = {"mode", "local_address", "remote_address", "local_port", "remote_port"}


def matches(entry: Entry, criteria: FilterCriteria) -> bool:
    if entry.mode != criteria.mode:
        return False
    if criteria.local_address is not None and criteria.local_address != entry.local_address:
        return False
    if criteria.remote_address is not None and criteria.remote_address != entry.remote_address:
        return False
    if criteria.local_port is not None and criteria.local_port != entry.local_port:
        return False
    if criteria.remote_port is not None and criteria.remote_port != entry.remote_port:
        return False
    return True


def filter_entries(entries: Iterable[Entry], criteria: FilterCriteria) -> List[Entry]:
    """Entries satisfying every set field of `criteria`, in their original order."""
    return [e for e in entries if matches(e, criteria)]


def _port(value, key: str) -> Optional[int]:
    if value is None:
        return None
    port = int(value)
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"{key} out of range: {value!r}")
    return port


def criteria_from_dict(data: dict) -> FilterCriteria:
    unknown = set(data) - CRITERIA_KEYS
    if unknown:
        raise ValueError(f"unknown filter keys: {', '.join(sorted(unknown))}")
    if "mode" not in data:
        raise ValueError("filter without 'mode'")
    mode = Mode.from_name(str(data["mode"]))
    local = data.get("local_address")
    remote = data.get("remote_address")
    return FilterCriteria(
        mode=mode,
        local_address=parse_address(str(local), mode) if local is not None else None,
        remote_address=parse_address(str(remote), mode) if remote is not None else None,
        local_port=_port(data.get("local_port"), "local_port"),
        remote_port=_port(data.get("remote_port"), "remote_port"),
    )


def load_criteria(path: Optional[str]) -> list[FilterCriteria]:
    """Read filter presets from a YAML (.yaml/.yml) or JSON file holding a list of mappings."""
    if not path:
        return []
    p = to_abs_path(path)
    if not p.exists():
        log.warning("filters not found: %s", p)
        return []
    txt = p.read_text(encoding="utf-8")
    data = yaml.safe_load(txt) if p.suffix in (".yaml", ".yml") else json.loads(txt)
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(d, dict) for d in data):
        raise ValueError(f"{p}: expected a list of filter mappings")
    criteria = [criteria_from_dict(d) for d in data]
    log.debug("loaded %d filter(s) from %s", len(criteria), p)
    return criteria
