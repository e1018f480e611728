"""Resolve logical sheets against the sheet names found in a workbook."""

from __future__ import annotations

import re
from typing import Iterable, Sequence

_WHITESPACE = re.compile(r"\s+")


def _squash(name: str) -> str:
    return _WHITESPACE.sub("", name.lower())


def find_sheet(sheet_names: Sequence[str], target: str) -> str | None:
    """Return the first sheet name matching ``target``, or ``None``.

    A sheet matches when its whitespace-free lower-cased name contains the
    target's (or vice versa). Failing that, the first sheet containing every
    word of the target, in any order, is accepted.
    """

    squashed_target = _squash(target)
    for name in sheet_names:
        squashed = _squash(name)
        if squashed_target in squashed or squashed in squashed_target:
            return name

    keywords = target.lower().split()
    for name in sheet_names:
        lowered = name.lower()
        if all(keyword in lowered for keyword in keywords):
            return name

    return None


def locate_sheet(sheet_names: Sequence[str], candidates: Iterable[str]) -> str | None:
    """Try each candidate spelling of a logical sheet in turn."""

    for candidate in candidates:
        found = find_sheet(sheet_names, candidate)
        if found is not None:
            return found
    return None


__all__ = ["find_sheet", "locate_sheet"]
