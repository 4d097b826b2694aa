"""
Locate cgroup v1 hierarchies and the current process's place in them

See ``man 5 proc`` for the format of ``/proc/<pid>/mountinfo`` and
``/proc/<pid>/cgroup``.
"""
import logging
from contextlib import closing
from typing import Callable, Iterator, Optional, TypeVar

from .model import CGroupRecord, MountRecord, PathLike, Subsystem
from .text import split_and_check

_log = logging.getLogger(__name__)

T = TypeVar("T")


def iter_lines(fname: PathLike) -> Iterator[str]:
    """Lazily yield lines of a text file with trailing newline removed."""
    with open(fname, "rt") as f:
        for line in f:
            yield line.rstrip("\n")


def iter_records(fname: PathLike, parse: Callable[[str], T]) -> Iterator[T]:
    """file path -> parsed records, blank lines are skipped.

    Parse errors are raised from the iterator, lines after a bad one are
    never looked at.
    """
    with closing(iter_lines(fname)) as lines:
        for line in lines:
            if line.strip() == "":
                continue
            yield parse(line)


def parse_mountinfo_line(line: str) -> MountRecord:
    """
    36 35 98:0 /mnt1 /mnt2 rw,noatime master:1 - ext3 /dev/root rw,errors=continue
    (1)(2)(3)   (4)   (5)      (6)      (7)   (8) (9)   (10)         (11)

    Optional fields (7) are terminated by a single ``-``, after it come
    filesystem type, mount source and super options.
    """
    fields = line.split()
    try:
        sep = fields.index("-")
    except ValueError:
        raise ValueError(f"No separator in mountinfo line: {line!r}") from None

    tail = fields[sep + 1 :]
    if len(tail) < 3:
        raise ValueError(f"Truncated mountinfo line: {line!r}")

    fs_type, _, super_options = tail[:3]
    mount_point = fields[4] if sep > 4 else None
    return MountRecord(mount_point, fs_type, tuple(super_options.split(",")))


def parse_cgroup_line(line: str) -> CGroupRecord:
    """
    hierarchy-ID:controller-list:cgroup-path

    4:memory:/docker/0123abcd
    """
    hierarchy_id, subsystems, path = split_and_check(line, ":", 3, maxsplit=2)
    path = path.strip()
    if hierarchy_id == "" or path == "":
        raise ValueError(f"Failed to parse cgroup line: {line!r}")

    tokens = tuple(s for s in subsystems.split(",") if s != "")
    return CGroupRecord(hierarchy_id, tokens, path)


def find_hierarchy_mount(subsystem: Subsystem, mountinfo: PathLike) -> Optional[str]:
    """
    Find where cgroup hierarchy hosting ``subsystem`` is mounted.

    :returns: Absolute mount point of the first matching cgroup mount
    :returns: ``None`` if not mounted, the file is unreadable or contains a malformed line
    """
    try:
        with closing(iter_records(mountinfo, parse_mountinfo_line)) as records:
            for rec in records:
                if not rec.fs_type.startswith("cgroup"):
                    continue
                if not any(subsystem.matches(opt) for opt in rec.super_options):
                    continue
                if rec.mount_point is None:
                    _log.debug("Skipping %s mount without mount point", subsystem)
                    continue
                return rec.mount_point
    except (OSError, ValueError) as e:
        _log.debug("Failed to scan %s: %s", mountinfo, e)
        return None

    _log.debug("No cgroup hierarchy for %s in %s", subsystem, mountinfo)
    return None


def find_cgroup_path(subsystem: Subsystem, cgroup: PathLike) -> Optional[str]:
    """
    Find cgroup of the current process for a given ``subsystem``.

    First matching line wins.

    :returns: cgroup path relative to the hierarchy mount point, starts with ``/``
    :returns: ``None`` if process is not in any hierarchy with that subsystem, or on error
    """
    try:
        with closing(iter_records(cgroup, parse_cgroup_line)) as records:
            for rec in records:
                if any(subsystem.matches(s) for s in rec.subsystems):
                    return rec.path
    except (OSError, ValueError) as e:
        _log.debug("Failed to scan %s: %s", cgroup, e)
        return None

    _log.debug("Process is not in a %s cgroup according to %s", subsystem, cgroup)
    return None
