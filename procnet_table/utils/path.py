from __future__ import annotations
import os
from pathlib import Path
from typing import Optional

def to_abs_path(p: Optional[str | os.PathLike]) -> Optional[Path]:
    """Convert p to an absolute path: expanduser, then resolve against the CWD."""
    if not p:
        return None
    pp = Path(p).expanduser()
    if not pp.is_absolute():
        pp = Path.cwd() / pp
    return pp.resolve()
