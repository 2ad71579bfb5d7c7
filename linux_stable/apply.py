"""
Applying the stable delta to the kernel tree.
"""

from enum import Enum
from typing import Optional

from git.exc import GitCommandError

from linux_stable.common import logger, print_header
from linux_stable.config import UpdateMethod
from linux_stable.conflicts import ConflictResolver
from linux_stable.models import VersionInfo
from linux_stable.repository import KernelRepository


class ApplyResult(str, Enum):
    """How the delta ended up in the tree."""
    CLEAN = "clean"
    RESOLVED = "resolved"


class RangeApplicator:
    """Cherry-pick the release range or merge the target tag."""
    
    def __init__(self, repo: KernelRepository, resolver: Optional[ConflictResolver] = None):
        self.repo = repo
        self.resolver = resolver or ConflictResolver(repo)
    
    def apply(self, method: UpdateMethod, versions: VersionInfo) -> ApplyResult:
        """
        Bring the tree up to the target version.
        
        Args:
            method: cherry-pick or merge
            versions: Computed versions with a target
        
        Returns:
            CLEAN if git applied everything, RESOLVED if conflicts were resolved
        
        Raises:
            ConflictResolutionError: if conflicts could not be resolved
        """
        if method == UpdateMethod.CHERRY_PICK:
            return self.cherry_pick(versions)
        return self.merge(versions)
    
    def cherry_pick(self, versions: VersionInfo) -> ApplyResult:
        logger.info(f"Cherry-picking {versions.range_expression}")
        try:
            self.repo.cherry_pick(versions.range_expression)
        except GitCommandError as e:
            logger.debug(f"Cherry-pick failed: {e.stderr}")
            self.resolver.resolve()
            return ApplyResult.RESOLVED
        
        print_header(f"{versions.target} PICKED CLEANLY!", style="green")
        return ApplyResult.CLEAN
    
    def merge(self, versions: VersionInfo) -> ApplyResult:
        logger.info(f"Merging {versions.target_tag}")
        try:
            self.repo.merge(versions.target_tag)
        except GitCommandError as e:
            logger.debug(f"Merge failed: {e.stderr}")
            self.resolver.resolve()
            return ApplyResult.RESOLVED
        
        print_header(f"{versions.target} MERGED CLEANLY!", style="green")
        return ApplyResult.CLEAN
