"""
Types and constants shared by the cgroup readers
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import NamedTuple, Optional, Tuple, Union

PathLike = Union[str, Path]

PROC_MOUNTINFO_FILENAME = "/proc/self/mountinfo"
PROC_CGROUP_FILENAME = "/proc/self/cgroup"
PROC_STATM_FILENAME = "/proc/self/statm"

# appended verbatim to a resolved cgroup directory
MEM_LIMIT_FILENAME = "/memory.limit_in_bytes"
CFS_QUOTA_FILENAME = "/cpu.cfs_quota_us"
CFS_PERIOD_FILENAME = "/cpu.cfs_period_us"

SIZE_MAX = 2 ** 64 - 1
UINT_MAX = 2 ** 32 - 1
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Reported memory limit when nothing bounds the process
NO_LIMIT = 0


class Subsystem(Enum):
    MEMORY = "memory"
    CPU = "cpu"

    def matches(self, token: str) -> bool:
        return token == self.value

    def __str__(self):
        return self.value


class MountRecord(NamedTuple):
    """One parsed line of ``/proc/<pid>/mountinfo``"""

    mount_point: Optional[str]
    fs_type: str
    super_options: Tuple[str, ...]


class CGroupRecord(NamedTuple):
    """One parsed line of ``/proc/<pid>/cgroup``"""

    hierarchy_id: str
    subsystems: Tuple[str, ...]
    path: str


@dataclass(frozen=True)
class ProcPaths:
    """Locations of the per-process files consulted by the queries.

    Defaults point at the real ``/proc/self``, use :py:meth:`under` to
    read a copy of that layout from some other directory.
    """

    mountinfo: str = PROC_MOUNTINFO_FILENAME
    cgroup: str = PROC_CGROUP_FILENAME
    statm: str = PROC_STATM_FILENAME

    @staticmethod
    def under(root: PathLike) -> "ProcPaths":
        """<root>/{mountinfo,cgroup,statm}"""
        root = Path(root)
        return ProcPaths(
            mountinfo=str(root / "mountinfo"),
            cgroup=str(root / "cgroup"),
            statm=str(root / "statm"),
        )
