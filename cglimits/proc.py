"""
Resource limits of the current process, public entry points
"""
import logging
import resource
from typing import Optional

import psutil

from .cgroups import CGroup
from .model import NO_LIMIT, SIZE_MAX, ProcPaths
from .text import parse_uint, read_first_line

_log = logging.getLogger(__name__)


def get_address_space_limit() -> Optional[int]:
    """
    :returns: soft ``RLIMIT_AS`` in bytes, ``None`` when unlimited or unknown
    """
    try:
        soft, _ = resource.getrlimit(resource.RLIMIT_AS)
    except (OSError, ValueError) as e:
        _log.debug("getrlimit(RLIMIT_AS) failed: %s", e)
        return None

    if soft == resource.RLIM_INFINITY or soft < 0:
        return None
    return soft


def get_total_memory() -> Optional[int]:
    """
    :returns: total physical memory of the machine in bytes, ``None`` if unknown
    """
    try:
        return psutil.virtual_memory().total
    except OSError as e:
        _log.debug("Failed to query total memory: %s", e)
        return None


def get_page_size() -> int:
    return resource.getpagesize()


def get_restricted_physical_memory_limit(paths: Optional[ProcPaths] = None) -> int:
    """
    Memory available to this process in bytes.

    Takes the minimum value from the following locations:

    - memory cgroup limit (if set)
    - address space rlimit (if set)
    - total physical memory

    :returns: ``NO_LIMIT`` (0) if none of the above could be determined
    """
    limit = CGroup(paths).get_physical_memory_limit()
    if limit is None:
        limit = SIZE_MAX

    as_limit = get_address_space_limit()
    if as_limit is not None:
        limit = min(limit, as_limit)

    # Ensure that limit is not greater than real memory size
    total = get_total_memory()
    if total is not None:
        limit = min(limit, total)

    if limit == SIZE_MAX:
        return NO_LIMIT
    return limit


def get_cpu_limit(paths: Optional[ProcPaths] = None) -> Optional[int]:
    """
    :returns: ``None`` if unconstrained or there is an error
    :returns: number of CPUs the CFS quota of this process adds up to, at least 1
    """
    return CGroup(paths).get_cpu_limit()


def get_working_set_size(paths: Optional[ProcPaths] = None) -> Optional[int]:
    """
    Resident set size of this process in bytes.

    :returns: ``None`` if ``statm`` can not be read or parsed
    """
    if paths is None:
        paths = ProcPaths()

    try:
        line = read_first_line(paths.statm)
        if line is None:
            _log.debug("Empty file: %s", paths.statm)
            return None
        # size resident shared text lib data dt
        fields = line.split()
        if len(fields) < 2:
            _log.debug("No resident field in %s: %r", paths.statm, line)
            return None
        pages, _ = parse_uint(fields[1])
    except (OSError, ValueError) as e:
        _log.debug("Failed to read %s: %s", paths.statm, e)
        return None

    return pages * get_page_size()


def get_max_mem(paths: Optional[ProcPaths] = None) -> int:
    """
    Max available memory, takes into account cgroup and rlimit restrictions
    """
    limit = get_restricted_physical_memory_limit(paths)
    if limit == NO_LIMIT:
        return psutil.virtual_memory().total
    return limit


def get_max_cpu(paths: Optional[ProcPaths] = None) -> int:
    """
    Max available CPU, takes into account cgroup CPU quota
    """
    ncpu = get_cpu_limit(paths)
    if ncpu is not None:
        return ncpu
    return psutil.cpu_count() or 1
