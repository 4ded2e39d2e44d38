"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/patterns.py
Copy-suffix conventions used for fuzzy filename matching.

Each convention is one row of an ordered table. Order matters: when a stem
ends with more than one recognised suffix, the first row that matches wins
and only that suffix is stripped ("File2_1" -> "File2", "Report (1)(2)" -> "Report (1)").
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple


@dataclass(frozen=True)
class SuffixPattern:
    """A trailing marker that file managers and sync tools append to copies."""
    key: str
    suffix: str  # regex fragment, matched at the end of a stem
    description: str

    def strip(self, stem: str, ignore_case: bool = False) -> Optional[str]:
        """
        Return the stem with this suffix removed, or None if it does not end with it.
        A stem made of nothing but the suffix is left alone.
        """
        match = _compile(rf"(?:{self.suffix})$", ignore_case).search(stem)
        if match is None or match.start() == 0:
            return None
        return stem[:match.start()]

    def is_suffixed(self, stem: str, base: str, ignore_case: bool = False) -> bool:
        """True if stem is exactly base followed by this suffix."""
        return _compile(rf"{re.escape(base)}(?:{self.suffix})", ignore_case).fullmatch(stem) is not None


@lru_cache(maxsize=4096)
def _compile(pattern: str, ignore_case: bool) -> "re.Pattern[str]":
    return re.compile(pattern, re.IGNORECASE if ignore_case else 0)


SUFFIX_PATTERNS: Tuple[SuffixPattern, ...] = (
    SuffixPattern("space-paren", r" \(\d+\)", "name (N)"),
    SuffixPattern("paren", r"(?<! )\(\d+\)", "name(N)"),
    SuffixPattern("dash-copy", r" - Copy(?:\(\d+\))?", "name - Copy, name - Copy(N)"),
    SuffixPattern("underscore-number", r"_\d+", "name_N"),
    SuffixPattern("underscore-copy", r"_copy\d*", "name_copy, name_copyN"),
)


def canonical_base(
        stem: str,
        ignore_case: bool = False,
        patterns: Tuple[SuffixPattern, ...] = SUFFIX_PATTERNS
) -> str:
    """
    Strip the first matching copy suffix from a stem (name without extension).

    Examples:
        "Photo (1)"     → "Photo"
        "Photo(2)"      → "Photo"
        "Report - Copy" → "Report"
        "Data_1"        → "Data"
        "Notes_copy3"   → "Notes"
        "Photo"         → "Photo"
    """
    for pattern in patterns:
        stripped = pattern.strip(stem, ignore_case)
        if stripped is not None:
            return stripped
    return stem
