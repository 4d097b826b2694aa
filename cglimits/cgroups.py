"""
Query Linux cgroup (v1) fs for memory and CPU limits of the current process
"""
import logging
from typing import Optional

from .model import (
    CFS_PERIOD_FILENAME,
    CFS_QUOTA_FILENAME,
    MEM_LIMIT_FILENAME,
    UINT_MAX,
    ProcPaths,
    Subsystem,
)
from .mountinfo import find_cgroup_path, find_hierarchy_mount
from .text import read_int, read_mem_value

_log = logging.getLogger(__name__)


def find_cgroup_dir(subsystem: Subsystem, paths: ProcPaths) -> Optional[str]:
    """
    Directory with control files of the ``subsystem`` cgroup this process belongs to.

    Mount point and cgroup path are joined by plain concatenation, cgroup
    path as reported by the kernel already starts with ``/``.
    """
    mount = find_hierarchy_mount(subsystem, paths.mountinfo)
    if mount is None:
        return None

    rel_path = find_cgroup_path(subsystem, paths.cgroup)
    if rel_path is None:
        return None

    return mount + rel_path


class CGroup:
    """
    Memory and CPU cgroup directories of the current process.

    Both directories are located once on construction and never looked up
    again, a directory that could not be found stays ``None`` and every read
    that needs it returns ``None`` without touching the filesystem.
    """

    def __init__(self, paths: Optional[ProcPaths] = None):
        if paths is None:
            paths = ProcPaths()
        self._paths = paths
        self.memory_dir = self._find_dir(Subsystem.MEMORY)
        self.cpu_dir = self._find_dir(Subsystem.CPU)

    def _find_dir(self, subsystem: Subsystem) -> Optional[str]:
        try:
            cgroup_dir = find_cgroup_dir(subsystem, self._paths)
        except MemoryError:
            _log.debug("Out of memory while locating %s cgroup", subsystem)
            return None

        _log.debug("%s cgroup: %s", subsystem, cgroup_dir)
        return cgroup_dir

    def get_physical_memory_limit(self) -> Optional[int]:
        """
        :returns: ``None`` if there was some error
        :returns: maximum RAM, in bytes, this process can use according to cgroups

        Note that number returned can be larger than total available memory.
        """
        if self.memory_dir is None:
            return None
        return read_mem_value(self.memory_dir + MEM_LIMIT_FILENAME)

    def get_cpu_limit(self) -> Optional[int]:
        """
        :returns: ``None`` if unconstrained or there is an error
        :returns: number of whole CPUs this process may use, at least 1
        """
        quota = self._read_cpu_value(CFS_QUOTA_FILENAME)
        if quota is None or quota <= 0:
            return None

        period = self._read_cpu_value(CFS_PERIOD_FILENAME)
        if period is None or period <= 0:
            return None

        # Cannot have less than 1 CPU
        if quota <= period:
            return 1

        return min(quota // period, UINT_MAX)

    def _read_cpu_value(self, fname: str) -> Optional[int]:
        if self.cpu_dir is None:
            return None
        return read_int(self.cpu_dir + fname)

    def __repr__(self):
        return "<CGroup memory:{}, cpu:{}>".format(self.memory_dir, self.cpu_dir)
