"""
Exceptions raised by the linux-stable updater.

Every stage raises one of these instead of exiting; the command-line
interface turns them into a message and exit code 1.
"""


class LinuxStableError(Exception):
    """Base class for all updater errors."""


class UsageError(LinuxStableError):
    """Invalid or missing command-line parameters."""


class RemoteUpdateError(LinuxStableError):
    """Fetching the upstream stable remote failed."""


class VersionError(LinuxStableError):
    """The current, latest or target version could not be used."""


class ConflictResolutionError(LinuxStableError):
    """Automatic conflict resolution could not finish."""
