"""
Git operations on the local kernel tree.

Thin wrapper around GitPython. Methods raise ``git.GitCommandError`` when
the underlying git command fails; callers decide whether that is fatal.
"""

from pathlib import Path
from typing import Dict, List, Set

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from linux_stable.common import logger
from linux_stable.errors import UsageError


# Index stage holding the incoming side of a conflict
THEIRS_STAGE = 3


def parse_unmerged(ls_files_output: str) -> Dict[str, Set[int]]:
    """
    Parse ``git ls-files -u -z`` output.
    
    Args:
        ls_files_output: NUL separated entries of the form
            "<mode> <object> <stage>\\t<path>"
    
    Returns:
        Mapping of unmerged path to the index stages present for it
    """
    unmerged: Dict[str, Set[int]] = {}
    for entry in ls_files_output.split("\0"):
        if not entry.strip():
            continue
        info, _, path = entry.partition("\t")
        fields = info.split()
        if len(fields) != 3 or not path:
            continue
        unmerged.setdefault(path, set()).add(int(fields[2]))
    return unmerged


class KernelRepository:
    """Git work tree of a kernel source folder."""
    
    def __init__(self, path: Path):
        try:
            self.repo = Repo(path)
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise UsageError(f"Invalid kernel source location! {path} is not a git repository")
        if self.repo.bare:
            raise UsageError(f"Invalid kernel source location! {path} is a bare repository")
    
    @property
    def path(self) -> Path:
        return Path(self.repo.working_tree_dir)
    
    @property
    def git_dir(self) -> Path:
        return Path(self.repo.git_dir)
    
    def head_commit(self) -> str:
        return self.repo.head.commit.hexsha
    
    def fetch_tags(self, remote_url: str) -> None:
        """Fetch a remote including all of its tags."""
        logger.debug(f"git fetch --tags {remote_url}")
        self.repo.git.fetch("--tags", remote_url)
    
    def list_tags(self, pattern: str, sort: str = "-taggerdate") -> List[str]:
        """List tag names matching a glob pattern in the given sort order."""
        output = self.repo.git.tag(f"--sort={sort}", "-l", pattern)
        return [line.strip() for line in output.splitlines() if line.strip()]
    
    def cherry_pick(self, rev_range: str) -> None:
        logger.debug(f"git cherry-pick {rev_range}")
        self.repo.git.cherry_pick(rev_range)
    
    def merge(self, ref: str) -> None:
        logger.debug(f"git merge --no-edit {ref}")
        with self.repo.git.custom_environment(GIT_MERGE_VERBOSITY="1"):
            self.repo.git.merge("--no-edit", ref)
    
    def cherry_pick_in_progress(self) -> bool:
        """Check whether a conflicted or empty pick is waiting to be committed."""
        return (self.git_dir / "CHERRY_PICK_HEAD").exists()
    
    def sequencer_in_progress(self) -> bool:
        """Check whether a multi-commit cherry-pick sequence is unfinished."""
        return (self.git_dir / "sequencer").is_dir()
    
    def merge_in_progress(self) -> bool:
        return (self.git_dir / "MERGE_HEAD").exists()
    
    def unmerged_paths(self) -> Dict[str, Set[int]]:
        """Get unmerged paths with the index stages present for each."""
        return parse_unmerged(self.repo.git.ls_files("-u", "-z"))
    
    def take_theirs(self, path: str, stages: Set[int]) -> None:
        """
        Resolve one unmerged path with the incoming side.
        
        A path the incoming side deleted has no stage 3 and is removed.
        """
        if THEIRS_STAGE in stages:
            self.repo.git.checkout("--theirs", "--", path)
        else:
            self.repo.git.rm("--quiet", "--", path)
    
    def stage_all(self) -> None:
        self.repo.git.add("-A")
    
    def commit_pending(self) -> None:
        """Commit a resolved merge or pick with its prepared message."""
        with self.repo.git.custom_environment(GIT_EDITOR="true"):
            self.repo.git.commit("--no-edit", "--allow-empty", "--cleanup=strip")
    
    def commit_all(self, message: str) -> None:
        self.repo.git.commit("-m", message)
    
    def continue_cherry_pick(self) -> None:
        with self.repo.git.custom_environment(GIT_EDITOR="true"):
            self.repo.git.cherry_pick("--continue")
    
    def abort_merge(self) -> bool:
        """Abort an in-progress merge; return False if there was none."""
        try:
            self.repo.git.merge("--abort")
            return True
        except GitCommandError:
            return False
    
    def abort_cherry_pick(self) -> bool:
        """Abort an in-progress cherry-pick; return False if there was none."""
        try:
            self.repo.git.cherry_pick("--abort")
            return True
        except GitCommandError:
            return False
