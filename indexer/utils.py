import re
from typing import Any, Callable, Iterable, TypeVar

T = TypeVar("T")

_DIGIT_RUNS = re.compile(r"(\d+)")


def natural_sort_key(text: str | None) -> tuple[tuple[Any, ...], str]:
    """Return a sort key that orders "v84_2" before "v84_10".

    re.split with a capture group alternates text and digit fragments, so
    odd positions are always digit runs and compare as integers. Text
    fragments compare case-insensitively. The raw string breaks ties so that
    only identical strings compare equal.

    Text order is casefolded code-point order, not a locale collation:
    accented letters do not match their plain forms ("é" sorts after "z")
    and punctuation sorts by code point. Fine for ASCII ids like "v84_1".
    """
    text = text or ""
    fragments = _DIGIT_RUNS.split(text)
    parts = tuple(
        int(fragment) if index % 2 else fragment.casefold()
        for index, fragment in enumerate(fragments)
    )
    return parts, text


def natural_compare(a: str | None, b: str | None) -> int:
    """Comparator form of natural_sort_key: -1, 0 or 1."""
    left, right = natural_sort_key(a), natural_sort_key(b)
    return (left > right) - (left < right)


def natural_sort(items: Iterable[T], key: Callable[[T], str | None] | None = None) -> list[T]:
    if key is None:
        return sorted(items, key=natural_sort_key)
    return sorted(items, key=lambda item: natural_sort_key(key(item)))
