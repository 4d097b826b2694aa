""" Memory and CPU limits of the current process under Linux cgroups (v1)
"""

from .cgroups import CGroup
from .model import NO_LIMIT, ProcPaths, Subsystem
from .proc import (
    get_cpu_limit,
    get_max_cpu,
    get_max_mem,
    get_restricted_physical_memory_limit,
    get_working_set_size,
)

from ._version import __version__

__all__ = (
    "CGroup",
    "NO_LIMIT",
    "ProcPaths",
    "Subsystem",
    "get_cpu_limit",
    "get_max_cpu",
    "get_max_mem",
    "get_restricted_physical_memory_limit",
    "get_working_set_size",
    "__version__",
)
