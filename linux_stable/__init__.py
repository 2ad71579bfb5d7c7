"""
linux-stable - Pull Linux stable updates into a kernel tree.

This package provides tools for:
- Fetching the linux-stable remote including its tags
- Calculating the current, latest and target kernel versions
- Merging or cherry-picking the stable delta
- Resolving conflicts automatically by taking the incoming side
"""

__version__ = "1.0.0"

from linux_stable.config import UpdateConfig, UpdateMethod, UpdateMode
from linux_stable.errors import (
    ConflictResolutionError,
    LinuxStableError,
    RemoteUpdateError,
    UsageError,
    VersionError,
)
from linux_stable.models import KernelVersion, VersionInfo

__all__ = [
    "__version__",
    "UpdateConfig",
    "UpdateMethod",
    "UpdateMode",
    "KernelVersion",
    "VersionInfo",
    "LinuxStableError",
    "UsageError",
    "RemoteUpdateError",
    "VersionError",
    "ConflictResolutionError",
]
