"""
Current, latest and target version calculation.
"""

import re
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from linux_stable.common import console, logger, print_header, run_command
from linux_stable.config import UpdateConfig, UpdateMode
from linux_stable.errors import VersionError
from linux_stable.models import KernelVersion, VersionInfo
from linux_stable.repository import KernelRepository


Runner = Callable[..., Tuple[int, str, str]]

MAKEFILE_VERSION_KEYS = ("VERSION", "PATCHLEVEL", "SUBLEVEL", "EXTRAVERSION")


def parse_version(version_str: str) -> KernelVersion:
    """Parse a version string, raising VersionError on garbage."""
    try:
        return KernelVersion.parse(version_str)
    except ValueError as e:
        raise VersionError(str(e)) from e


def read_makefile_version(makefile: Path) -> str:
    """
    Extract the kernel version from the header of a top-level Makefile.
    
    Args:
        makefile: Path to the kernel Makefile
    
    Returns:
        Version string such as "5.4.10" or "5.4.0-rc1"
    
    Raises:
        VersionError: if VERSION, PATCHLEVEL or SUBLEVEL is missing
    """
    values = {}
    with open(makefile) as f:
        for line in f:
            key, sep, value = line.partition("=")
            key = key.strip()
            if not sep or key not in MAKEFILE_VERSION_KEYS or key in values:
                continue
            values[key] = value.strip()
            if len(values) == len(MAKEFILE_VERSION_KEYS):
                break
    
    missing = [k for k in MAKEFILE_VERSION_KEYS[:3] if not values.get(k)]
    if missing:
        raise VersionError(f"Unable to locate {', '.join(missing)} in {makefile}")
    
    return "{VERSION}.{PATCHLEVEL}.{SUBLEVEL}".format(**values) + values.get("EXTRAVERSION", "")


def release_tag_pattern(series: str) -> re.Pattern:
    """Match release tags of one series: v5.4 and v5.4.N, but not v5.40 or v5.4-rc1."""
    return re.compile(rf"^v{re.escape(series)}(?:\.\d+)?$")


def compute_target(
    current: KernelVersion,
    latest: KernelVersion,
    mode: UpdateMode,
    target_version: Optional[str] = None,
) -> VersionInfo:
    """
    Work out the version to update to.
    
    Args:
        current: Version of the kernel tree
        latest: Most recent release tag of the same series
        mode: NEXT (+1 sublevel), LATEST or EXPLICIT
        target_version: Requested version for EXPLICIT mode
    
    Returns:
        VersionInfo with the target filled in
    
    Raises:
        VersionError: if the target is already present or newer than latest
    """
    if mode == UpdateMode.NEXT:
        target = current.next_sublevel()
    elif mode == UpdateMode.LATEST:
        target = latest
    else:
        if not target_version:
            raise VersionError("Please specify a version to update!")
        target = parse_version(target_version)
        if target.series != current.series:
            raise VersionError(f"{target_version} is not a {current.series} release!")
    
    if target.sublevel <= current.sublevel:
        raise VersionError(f"{target} is already present!")
    if target.sublevel > latest.sublevel:
        raise VersionError(f"{current} is the latest!")
    
    return VersionInfo(current=current, latest=latest, target=target)


class VersionCalculator:
    """Determine current and latest versions of a kernel tree."""
    
    def __init__(
        self,
        repo: KernelRepository,
        config: UpdateConfig,
        runner: Runner = run_command,
    ):
        self.repo = repo
        self.config = config
        self.runner = runner
    
    def current_version(self) -> KernelVersion:
        """
        Get the version the tree builds, as reported by its kernelversion target.
        
        Falls back to the Makefile header when make is unavailable or fails.
        """
        returncode, stdout, stderr = self.runner(
            self.config.make_args,
            cwd=self.config.kernel_folder,
            timeout=self.config.command_timeout,
        )
        lines = stdout.strip().splitlines()
        if returncode == 0 and lines:
            return parse_version(lines[-1])
        
        logger.warning(
            f"make kernelversion failed ({stderr.strip() or returncode}), "
            f"reading {self.config.makefile}"
        )
        return parse_version(read_makefile_version(self.config.makefile))
    
    def release_tags(self, series: str) -> List[str]:
        """List release tags of a series, most recently tagged first."""
        pattern = release_tag_pattern(series)
        return [tag for tag in self.repo.list_tags(f"v{series}*") if pattern.match(tag)]
    
    def latest_version(self, current: KernelVersion) -> KernelVersion:
        """
        Get the most recently tagged release of the current series.
        
        Raises:
            VersionError: if no release tag of the series is known locally
        """
        tags = self.release_tags(current.series)
        if not tags:
            raise VersionError(f"No v{current.series} tags found! Fetch linux-stable first")
        return parse_version(tags[0])
    
    def calculate(self) -> VersionInfo:
        """Get current and latest versions and report them."""
        print_header("Calculating versions")
        
        current = self.current_version()
        latest = self.latest_version(current)
        
        console.print(f"[bold]Current kernel version:[/bold] {current}")
        console.print(f"[bold]Latest kernel version:[/bold] {latest}")
        
        return VersionInfo(current=current, latest=latest)
