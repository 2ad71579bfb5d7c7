"""
Configuration for a single linux-stable update run.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional
import os

from linux_stable.errors import UsageError


class UpdateMethod(str, Enum):
    """How the stable delta is applied."""
    CHERRY_PICK = "cherry-pick"
    MERGE = "merge"


class UpdateMode(str, Enum):
    """How the target version is chosen."""
    NEXT = "next"
    LATEST = "latest"
    EXPLICIT = "explicit"


# Upstream linux-stable repository
STABLE_REMOTE_URL = "https://git.kernel.org/pub/scm/linux/kernel/git/stable/linux-stable.git/"

# Build metadata every kernel tree carries at its top level
KERNEL_MAKEFILE = "Makefile"

# Arguments for querying the tree's version through its own build system
MAKE_KERNELVERSION_ARGS = ["make", "-s", "CC=gcc", "CROSS_COMPILE=", "kernelversion"]

# Fallback commit message when no merge or cherry-pick is in progress
FALLBACK_COMMIT_MESSAGE = "Resolve conflicts during merge"


@dataclass
class UpdateConfig:
    """Everything one invocation needs, passed explicitly through each stage."""
    
    method: Optional[UpdateMethod] = None
    kernel_folder: Path = field(default_factory=Path.cwd)
    mode: UpdateMode = UpdateMode.NEXT
    target_version: Optional[str] = None
    fetch_only: bool = False
    print_latest: bool = False
    
    remote_url: str = STABLE_REMOTE_URL
    make_args: List[str] = field(default_factory=lambda: list(MAKE_KERNELVERSION_ARGS))
    command_timeout: int = 300
    
    log_file: Optional[Path] = None
    verbose: bool = False
    
    @classmethod
    def from_env(cls, **overrides) -> "UpdateConfig":
        """
        Create configuration from environment variables.
        
        Keyword arguments that are not None take precedence over the
        environment.
        """
        log_file = os.getenv("LINUX_STABLE_LOG_FILE")
        values = {
            "remote_url": os.getenv("LINUX_STABLE_REMOTE", STABLE_REMOTE_URL),
            "log_file": Path(log_file) if log_file else None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
    
    @property
    def makefile(self) -> Path:
        return self.kernel_folder / KERNEL_MAKEFILE
    
    def validate(self) -> None:
        """
        Check that the run can start.
        
        Raises:
            UsageError: no update method, or the folder is not a kernel tree
        """
        if self.method is None:
            raise UsageError("Neither cherry-pick nor merge were specified!")
        if not self.kernel_folder.is_dir():
            raise UsageError("Invalid kernel source location! Folder does not exist")
        if not self.makefile.is_file():
            raise UsageError("Invalid kernel source location! No Makefile present")
        if self.mode == UpdateMode.EXPLICIT and not self.target_version:
            raise UsageError("Please specify a version to update!")
