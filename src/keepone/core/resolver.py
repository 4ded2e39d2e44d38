"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Pure keep/remove decision for duplicate groups — zero I/O.
The newest file (latest modification time) survives; ties keep the file seen first.
"""
import logging
from functools import reduce

from keepone.core.exceptions import InvalidGroupError
from keepone.core.interfaces import KeepPolicy
from keepone.core.models import DuplicateGroup, FileDescriptor, Resolution

logger = logging.getLogger(__name__)


def latest_modified(current: FileDescriptor, challenger: FileDescriptor) -> FileDescriptor:
    """Keep the newer file. Only a strictly newer challenger replaces the current pick."""
    return challenger if challenger.mtime > current.mtime else current


class GroupResolver:
    """
    Decides which file of a duplicate group is kept.
    The keep policy is folded over the group in order, so it only has to
    compare two descriptors at a time.
    """

    def __init__(self, keep_policy: KeepPolicy = latest_modified):
        self.keep_policy = keep_policy

    def resolve(self, group: DuplicateGroup) -> Resolution:
        """
        Returns the Resolution for one group.
        Raises:
            InvalidGroupError: the group has fewer than two files.
        """
        if group is None or len(group.files) < 2:
            count = 0 if group is None else len(group.files)
            raise InvalidGroupError(f"Duplicate group must contain at least 2 files, got {count}")

        kept = reduce(self.keep_policy, group.files)
        kept_index = next((i for i, f in enumerate(group.files) if f is kept), None)
        if kept_index is None:
            raise ValueError(f"Keep policy returned a file outside the group: {kept!r}")
        removed = tuple(f for i, f in enumerate(group.files) if i != kept_index)

        logger.debug(f"Keeping {kept.path}, removing {len(removed)} file(s)")
        return Resolution(
            kept=kept,
            removed=removed,
            bytes_reclaimed=kept.size * len(removed)
        )


def resolve(group: DuplicateGroup) -> Resolution:
    """Module-level shortcut using the default latest-modified policy."""
    return GroupResolver().resolve(group)
