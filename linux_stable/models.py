"""
Data models for the linux-stable updater using Pydantic for validation.
"""

import re
from typing import Optional

from pydantic import BaseModel, field_validator


# major.minor[.sublevel], optionally prefixed with "v" and followed by an
# extra version such as "-rc3" or "-dirty"
VERSION_PATTERN = re.compile(r"^v?(\d+)\.(\d+)(?:\.(\d+))?(?:[-+~].*)?$")


class KernelVersion(BaseModel):
    """A three-part kernel version (major.minor.sublevel)."""
    major: int
    minor: int
    sublevel: int = 0
    
    @field_validator("major", "minor", "sublevel")
    @classmethod
    def validate_component(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Version components must not be negative: {v}")
        return v
    
    @classmethod
    def parse(cls, version_str: str) -> "KernelVersion":
        """
        Parse a version string like '5.4.10', 'v5.4' or '5.4.0-rc1'.
        
        Raises:
            ValueError: if the string is not a kernel version
        """
        match = VERSION_PATTERN.match(version_str.strip())
        if not match:
            raise ValueError(f"Invalid kernel version: {version_str!r}")
        major, minor, sublevel = match.groups()
        return cls(major=int(major), minor=int(minor), sublevel=int(sublevel or 0))
    
    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.sublevel}"
    
    def _key(self):
        return (self.major, self.minor, self.sublevel)
    
    def __lt__(self, other: "KernelVersion") -> bool:
        return self._key() < other._key()
    
    def __le__(self, other: "KernelVersion") -> bool:
        return self._key() <= other._key()
    
    def __gt__(self, other: "KernelVersion") -> bool:
        return self._key() > other._key()
    
    def __ge__(self, other: "KernelVersion") -> bool:
        return self._key() >= other._key()
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KernelVersion):
            return False
        return self._key() == other._key()
    
    def __hash__(self) -> int:
        return hash(self._key())
    
    @property
    def series(self) -> str:
        """Get the kernel series (e.g., '5.4' from '5.4.10')."""
        return f"{self.major}.{self.minor}"
    
    @property
    def tag_name(self) -> str:
        """
        Name of the release tag for this version.
        
        Sublevel 0 releases are tagged without a sublevel ('v5.4', not
        'v5.4.0').
        """
        if self.sublevel == 0:
            return f"v{self.series}"
        return f"v{self}"
    
    def next_sublevel(self) -> "KernelVersion":
        """Get the following stable release of the same series."""
        return KernelVersion(major=self.major, minor=self.minor, sublevel=self.sublevel + 1)


class VersionInfo(BaseModel):
    """Versions computed for one update run."""
    current: KernelVersion
    latest: KernelVersion
    target: Optional[KernelVersion] = None
    
    @property
    def range_start(self) -> str:
        """Tag the applied range starts from (exclusive)."""
        return self.current.tag_name
    
    @property
    def target_tag(self) -> str:
        if self.target is None:
            raise ValueError("No target version has been computed")
        return self.target.tag_name
    
    @property
    def range_expression(self) -> str:
        """Commit range between the current and the target release, e.g. 'v5.4.10..v5.4.11'."""
        return f"{self.range_start}..{self.target_tag}"
