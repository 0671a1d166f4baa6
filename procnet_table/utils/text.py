from __future__ import annotations
from typing import List


def tokenize(line: str) -> List[str]:
    """Split a table row on spaces, dropping the empty tokens left by column padding."""
    return [t for t in line.strip().split(" ") if t]
