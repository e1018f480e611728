"""Header normalization and column discovery."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Sequence

_STRIP_PATTERN = re.compile(r"[\s_-]+")
_SUBSCRIPTS = str.maketrans({"₂": "2", "₄": "4"})


def normalize_column_name(label: str) -> str:
    """Reduce a header to its lookup token.

    Lower-cases, drops whitespace, hyphens and underscores, and folds the
    subscript digits used in chemical formulas (CO₂, CH₄) to ASCII. Other
    diacritics are left untouched.
    """

    return _STRIP_PATTERN.sub("", label.lower()).translate(_SUBSCRIPTS)


@dataclass(slots=True)
class ColumnIndex:
    """Outcome of matching expected fields against a header row."""

    positions: Dict[str, int]
    missing: List[str]

    def get(self, field: str) -> int | None:
        return self.positions.get(field)


def _find_header(tokens: Sequence[str], candidate: str) -> int | None:
    for idx, token in enumerate(tokens):
        if token == candidate or candidate in token:
            return idx
    return None


def build_column_index(
    headers: Iterable[str],
    candidates: Mapping[str, Sequence[str]],
) -> ColumnIndex:
    """Map each field to the first header that equals or contains one of its candidates.

    Args:
        headers: Raw header labels, in column order.
        candidates: ``field -> [header spelling, ...]``; spellings are tried in
            order and normalized before matching.
    """

    tokens = [normalize_column_name(h) for h in headers]
    positions: Dict[str, int] = {}
    missing: List[str] = []
    for field, spellings in candidates.items():
        found = None
        for spelling in spellings:
            token = normalize_column_name(spelling)
            if not token:
                continue
            found = _find_header(tokens, token)
            if found is not None:
                break
        if found is None:
            missing.append(field)
        else:
            positions[field] = found
    return ColumnIndex(positions=positions, missing=missing)


__all__ = ["ColumnIndex", "build_column_index", "normalize_column_name"]
