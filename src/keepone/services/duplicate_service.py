from typing import List, Optional
from keepone.core.models import DuplicateGroup, Resolution
from keepone.core.interfaces import GroupResolverProtocol
from keepone.core.resolver import GroupResolver


class DuplicateService:
    @staticmethod
    def resolve_groups(groups: List[DuplicateGroup], resolver: Optional[GroupResolverProtocol] = None) -> List[Resolution]:
        """
        Decides the kept file of every group.

        Args:
            groups (List[DuplicateGroup]): Groups produced by the group builder.
            resolver (GroupResolverProtocol): Resolver to use; defaults to GroupResolver (latest-modified wins).

        Returns:
            List[Resolution]: One resolution per group, same order as groups.
        """
        resolver = resolver or GroupResolver()
        return [resolver.resolve(group) for group in groups]

    @staticmethod
    def files_to_remove(resolutions: List[Resolution]) -> List[str]:
        """Paths of every file marked for removal, in group order."""
        return [path for resolution in resolutions for path in resolution.removed_paths]

    @staticmethod
    def total_bytes_reclaimed(resolutions: List[Resolution]) -> int:
        """Space freed if every removal succeeds."""
        return sum(resolution.bytes_reclaimed for resolution in resolutions)

    @staticmethod
    def remove_files_from_groups(groups: List[DuplicateGroup], file_paths: List[str]) -> List[DuplicateGroup]:
        """
        Removes files with the specified paths from all duplicate groups.

        Groups that contain fewer than 2 files after removal are discarded.

        Args:
            groups (List[DuplicateGroup]): List of duplicate groups to update.
            file_paths (List[str]): List of file paths to remove.

        Returns:
            List[DuplicateGroup]: Updated list of duplicate groups.
        """
        removed = set(file_paths)
        updated_groups = []
        for group in groups:
            remaining = DuplicateGroup(
                size=group.size,
                files=[f for f in group.files if f.path not in removed],
                exact_name_match=group.exact_name_match
            )
            if remaining.is_duplicate():
                updated_groups.append(remaining)
        return updated_groups
