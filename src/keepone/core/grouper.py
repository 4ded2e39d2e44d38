"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Builds duplicate groups from file descriptors using size and name heuristics.

Pipeline per call:
  1. Size buckets      : files of equal byte size (single-file buckets dropped)
  2. Exact-name groups : identical file name inside a bucket
  3. Name-pattern groups: remaining files whose names differ only by a copy suffix
                         ("Photo (1).jpg", "Photo_copy.jpg", ...) and share the extension

No content is read. All working state lives inside one build_groups() call,
so a single GroupBuilder can be shared freely.
"""

import sys
import logging
from numbers import Real
from typing import List, Dict, Any, Callable, Optional, Sequence, Set, Tuple
from collections import defaultdict

from keepone.core.exceptions import InvalidInputError
from keepone.core.models import FileDescriptor, DuplicateGroup
from keepone.core.patterns import SUFFIX_PATTERNS, SuffixPattern, canonical_base

logger = logging.getLogger(__name__)


def platform_is_case_sensitive() -> bool:
    """Windows and macOS file systems compare names case-insensitively by default."""
    return sys.platform not in ("win32", "darwin")


class GroupBuilder:
    """
    Partitions file descriptors into DuplicateGroup instances.

    Attributes:
        case_sensitive: Compare names and extensions case-sensitively.
                        None selects the platform default.
        patterns: Ordered copy-suffix table used for name-pattern matching.
    """

    def __init__(
        self,
        case_sensitive: Optional[bool] = None,
        patterns: Tuple[SuffixPattern, ...] = SUFFIX_PATTERNS
    ):
        self.case_sensitive = platform_is_case_sensitive() if case_sensitive is None else case_sensitive
        self.patterns = patterns

    @property
    def ignore_case(self) -> bool:
        return not self.case_sensitive

    def build_groups(self, files: Sequence[FileDescriptor]) -> List[DuplicateGroup]:
        """
        Groups files into likely duplicates.

        Groups come out in size-bucket discovery order; inside a bucket,
        exact-name groups precede name-pattern groups.

        Raises:
            InvalidInputError: a descriptor has no usable size or mtime.
        """
        for file in files:
            self._validate(file)

        groups: List[DuplicateGroup] = []
        for size, bucket in self.group_by_size(files).items():
            consumed: Set[int] = set()  # indexes into bucket
            groups.extend(self._exact_name_groups(size, bucket, consumed))
            groups.extend(self._name_pattern_groups(size, bucket, consumed))

        logger.debug(f"Built {len(groups)} duplicate groups from {len(files)} files")
        return groups

    def group_by_size(self, files: Sequence[FileDescriptor]) -> Dict[int, List[FileDescriptor]]:
        """Groups files by their size. Sizes with a single file are dropped."""
        return self._group_by(files, lambda f: f.size)

    def _exact_name_groups(
        self,
        size: int,
        bucket: List[FileDescriptor],
        consumed: Set[int]
    ) -> List[DuplicateGroup]:
        groups = []
        by_name = self._group_by(range(len(bucket)), lambda i: self._fold(bucket[i].name))
        for name, indexes in by_name.items():
            consumed.update(indexes)
            groups.append(DuplicateGroup(
                size=size,
                files=[bucket[i] for i in indexes],
                exact_name_match=True
            ))
            logger.debug(f"Exact name group: {name!r} x{len(indexes)} ({size} bytes)")
        return groups

    def _name_pattern_groups(
        self,
        size: int,
        bucket: List[FileDescriptor],
        consumed: Set[int]
    ) -> List[DuplicateGroup]:
        groups = []
        for anchor_idx, anchor in enumerate(bucket):
            if anchor_idx in consumed:
                continue

            anchor_base = self._canonical(anchor.stem)
            members = [anchor_idx]

            # Earlier anchors that found no partner stay unconsumed and are candidates here
            for idx in range(len(bucket)):
                if idx == anchor_idx or idx in consumed:
                    continue
                if self.matches(anchor, anchor_base, bucket[idx]):
                    members.append(idx)

            if len(members) < 2:
                continue  # anchor is not a duplicate of anything

            members.sort()
            consumed.update(members)
            groups.append(DuplicateGroup(
                size=size,
                files=[bucket[i] for i in members],
                exact_name_match=False
            ))
            logger.debug(f"Name pattern group: base {anchor_base!r} x{len(members)} ({size} bytes)")
        return groups

    def matches(self, anchor: FileDescriptor, anchor_base: str, candidate: FileDescriptor) -> bool:
        """
        True if candidate is a copy-suffix variant of the anchor.
        Extensions must be equal; then either the canonical bases are equal
        or the candidate stem is anchor_base plus one of the known suffixes.
        """
        if self._fold(anchor.extension) != self._fold(candidate.extension):
            return False

        stem = candidate.stem
        if self._fold(self._canonical(stem)) == self._fold(anchor_base):
            return True

        return any(p.is_suffixed(stem, anchor_base, self.ignore_case) for p in self.patterns)

    def _canonical(self, stem: str) -> str:
        return canonical_base(stem, self.ignore_case, self.patterns)

    def _fold(self, text: str) -> str:
        return text if self.case_sensitive else text.casefold()

    @staticmethod
    def _validate(file: FileDescriptor) -> None:
        size = getattr(file, "size", None)
        if size is None or isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise InvalidInputError(f"Missing or invalid size for {getattr(file, 'path', file)!r}: {size!r}")

        mtime = getattr(file, "mtime", None)
        if mtime is None or isinstance(mtime, bool) or not isinstance(mtime, Real):
            raise InvalidInputError(f"Missing or invalid modification time for {file.path!r}: {mtime!r}")

    @staticmethod
    def _group_by(items, key_func: Callable[[Any], Any]) -> Dict[Any, List[Any]]:
        """
        Helper method to group items by any computed key.
        Args:
            items: Items to group, in encounter order
            key_func: Function that computes a hashable key from an item
        Returns:
            Dict[key, List[item]] in first-seen key order, groups with 2+ items only
        """
        groups = defaultdict(list)
        for item in items:
            groups[key_func(item)].append(item)

        return {key: group for key, group in groups.items() if len(group) >= 2}


def build_groups(files: Sequence[FileDescriptor], case_sensitive: Optional[bool] = None) -> List[DuplicateGroup]:
    """Module-level shortcut for GroupBuilder(case_sensitive).build_groups(files)."""
    return GroupBuilder(case_sensitive).build_groups(files)
