import logging
import sys
from typing import Optional

import click

from .model import NO_LIMIT, ProcPaths
from .proc import get_cpu_limit, get_restricted_physical_memory_limit, get_working_set_size


def setup_logging(level: int = -1):
    """
    Setup logging to print to stdout with default logging level being INFO.
    """
    if level < 0:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="[%(asctime)s] {%(filename)s:%(lineno)d} %(levelname)s - %(message)s",
        stream=sys.stdout,
    )


def _fmt(value: Optional[int]) -> str:
    if value is None:
        return "unknown"
    return f"{value:,d}"


@click.command("cglimits")
@click.option(
    "--proc-root",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Read mountinfo, cgroup and statm from this directory instead of /proc/self",
)
@click.option("--verbose", "-v", is_flag=True, help="Print debug diagnostics")
def main(proc_root: Optional[str], verbose: bool):
    """Print memory and CPU limits of this process."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    paths = ProcPaths() if proc_root is None else ProcPaths.under(proc_root)

    mem = get_restricted_physical_memory_limit(paths)
    click.echo("memory limit: " + ("unlimited" if mem == NO_LIMIT else _fmt(mem)))
    click.echo("cpu limit:    " + _fmt(get_cpu_limit(paths)))
    click.echo("working set:  " + _fmt(get_working_set_size(paths)))


if __name__ == "__main__":
    main()
