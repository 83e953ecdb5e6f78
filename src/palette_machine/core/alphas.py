"""
Alpha sets in range-compressed string form.

Figma variables have no opacity modifier, so every transparency a design
system needs is pre-generated as its own variable. Alpha sets are authored as
strings such as ``"0-30,35,40"`` and expanded to sorted integer percentages.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)

ALPHA_MIN = 0
ALPHA_MAX = 100


def _parse_int(text: str) -> int | None:
    try:
        return int(text.strip())
    except ValueError:
        return None


def parse_alpha_string(text: str | None) -> list[int]:
    """Expand ``"0-3,10"`` into ``[0, 1, 2, 3, 10]``.

    Unparseable parts and values outside 0-100 are skipped.

    Returns:
        Sorted list without duplicates.
    """
    if not text or not isinstance(text, str):
        return []

    values: set[int] = set()
    for part in (p.strip() for p in text.split(",")):
        if not part:
            continue
        if "-" in part:
            start_text, _, end_text = part.partition("-")
            start, end = _parse_int(start_text), _parse_int(end_text)
            if start is None or end is None:
                logger.debug(f"Skipping malformed alpha range {part!r}")
                continue
            values.update(range(max(start, ALPHA_MIN), min(end, ALPHA_MAX) + 1))
        else:
            value = _parse_int(part)
            if value is None:
                logger.debug(f"Skipping malformed alpha value {part!r}")
                continue
            values.add(value)

    return sorted(v for v in values if ALPHA_MIN <= v <= ALPHA_MAX)


def _format_run(start: int, end: int) -> str:
    if start == end:
        return str(start)
    if end == start + 1:
        return f"{start},{end}"
    return f"{start}-{end}"


def alphas_to_string(alphas: Iterable[int]) -> str:
    """Compact alpha values back into range form.

    Runs of three or more become ``a-b``; a run of two is written ``a,b``.
    """
    ordered = sorted(set(alphas))
    if not ordered:
        return ""

    runs: list[str] = []
    run_start = prev = ordered[0]
    for value in ordered[1:]:
        if value != prev + 1:
            runs.append(_format_run(run_start, prev))
            run_start = value
        prev = value
    runs.append(_format_run(run_start, prev))

    return ",".join(runs)
