"""Helpers for pulling a fixed subset of fields out of upstream records."""
import re
from typing import Any, Callable, List, Optional, Sequence

from toolkit.errors import UpstreamFailure


def as_list(value: Any) -> List[Any]:
    """Treat a missing (None) collection as empty."""
    if value is None:
        return []
    return list(value)


def first(items: Optional[Sequence[Any]], user_message: str) -> Any:
    """Return the primary result at position 0, or fail with `user_message`."""
    if not items:
        raise UpstreamFailure("Upstream returned no results", user_message=user_message)
    return items[0]


def split_lines(text: Optional[str]) -> List[str]:
    """Split multi-line text into non-empty, trimmed lines."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def indexed_pairs(
    get: Callable[[str], Any],
    primary: str,
    secondary: str,
    slots: int,
    separator: str = " - ",
) -> List[str]:
    """Join `<primary>N` with `<secondary>N` for N in 1..slots.

    Slots whose primary value is blank are skipped. A blank secondary value
    leaves the primary on its own.
    """
    pairs: List[str] = []
    for index in range(1, slots + 1):
        name = (get(f"{primary}{index}") or "").strip()
        if not name:
            continue
        detail = (get(f"{secondary}{index}") or "").strip()
        pairs.append(f"{name}{separator}{detail}" if detail else name)
    return pairs


def contains_any(text: str, needles: Sequence[str]) -> bool:
    """Case-insensitive match of any of `needles` as whole words in `text`."""
    return any(
        re.search(rf"(?<!\w){re.escape(needle)}(?!\w)", text, re.IGNORECASE) for needle in needles
    )
