"""
Automatic conflict resolution after a failed cherry-pick or merge.

The policy is deliberately simple and lossy: every conflicted path takes
the incoming (linux-stable) side. Local changes to those paths are lost
and must be reapplied by hand if they mattered.
"""

from git.exc import GitCommandError

from linux_stable.common import logger, print_success, print_warning
from linux_stable.config import FALLBACK_COMMIT_MESSAGE
from linux_stable.errors import ConflictResolutionError
from linux_stable.repository import KernelRepository


class ConflictResolver:
    """Resolve the interrupted operation in a kernel tree by taking theirs."""
    
    def __init__(self, repo: KernelRepository):
        self.repo = repo
        self.resolved_paths = 0
    
    def resolve(self) -> None:
        """
        Resolve conflicts and record the result.
        
        Raises:
            ConflictResolutionError: if the tree could not be committed; any
                in-progress merge or cherry-pick is aborted first
        """
        print_warning("Conflicts detected! Attempting to resolve automatically...")
        
        try:
            self._resolve()
        except GitCommandError as e:
            logger.debug(f"Resolution failed: {e}")
            self.abort()
            raise ConflictResolutionError(
                "Automatic conflict resolution failed! Please resolve manually."
            ) from e
        
        logger.info(f"Resolved {self.resolved_paths} conflicted path(s) with incoming changes")
        print_success("Conflicts resolved successfully!")
    
    def _resolve(self) -> None:
        if self.repo.cherry_pick_in_progress() or self.repo.sequencer_in_progress():
            self._finish_cherry_pick()
        elif self.repo.merge_in_progress():
            self.take_theirs()
            self.repo.commit_pending()
        else:
            self.take_theirs()
            self.repo.commit_all(FALLBACK_COMMIT_MESSAGE)
    
    def _finish_cherry_pick(self) -> None:
        # Each round commits one stopped pick, so the loop ends with the range
        while True:
            self.take_theirs()
            if self.repo.cherry_pick_in_progress():
                self.repo.commit_pending()
            if not self.repo.sequencer_in_progress():
                return
            try:
                self.repo.continue_cherry_pick()
                return
            except GitCommandError:
                if not self.repo.cherry_pick_in_progress():
                    raise
                logger.info("Cherry-pick stopped again, resolving next commit")
    
    def take_theirs(self) -> None:
        """Replace every unmerged path with the incoming side and stage everything."""
        for path, stages in sorted(self.repo.unmerged_paths().items()):
            logger.debug(f"Taking theirs: {path}")
            self.repo.take_theirs(path, stages)
            self.resolved_paths += 1
        self.repo.stage_all()
    
    def abort(self) -> None:
        """Abort any in-progress merge or cherry-pick; absence of one is fine."""
        if self.repo.merge_in_progress() and self.repo.abort_merge():
            logger.info("Aborted merge")
        if (self.repo.cherry_pick_in_progress() or self.repo.sequencer_in_progress()) \
                and self.repo.abort_cherry_pick():
            logger.info("Aborted cherry-pick")
