import pytest
from cglimits.model import ProcPaths

CGROUP_PATH = "/docker/0123abcd"


def write_proc(
    root,
    mem_limit="2147483648\n",
    cfs_quota="250000\n",
    cfs_period="100000\n",
    statm="10000 2500 300 10 0 4000 0\n",
):
    """Build fake /proc/self and cgroup v1 hierarchies under ``root``.

    Pass ``None`` for a value to leave the corresponding file out.
    """
    mem_mount = root / "sys/fs/cgroup/memory"
    cpu_mount = root / "sys/fs/cgroup/cpu,cpuacct"
    proc = root / "proc"
    proc.mkdir(parents=True)

    (proc / "mountinfo").write_text(
        "22 27 0:21 / /sys rw,nosuid,nodev,noexec,relatime shared:7 - sysfs sysfs rw\n"
        "25 22 0:22 / /sys/fs/cgroup ro,nosuid,nodev,noexec shared:8 - tmpfs tmpfs ro,mode=755\n"
        "26 25 0:23 / /sys/fs/cgroup/unified rw,nosuid shared:9 - cgroup2 cgroup2 rw,nsdelegate\n"
        f"30 25 0:27 / {mem_mount} rw,nosuid,nodev,noexec,relatime shared:13 - cgroup cgroup rw,memory\n"
        f"31 25 0:28 / {cpu_mount} rw,nosuid,nodev,noexec,relatime shared:14 - cgroup cgroup rw,cpu,cpuacct\n"
    )
    (proc / "cgroup").write_text(
        f"12:memory:{CGROUP_PATH}\n"
        "7:pids:/docker/0123abcd\n"
        f"4:cpu,cpuacct:{CGROUP_PATH}\n"
        "0::/system.slice/docker.service\n"
    )
    if statm is not None:
        (proc / "statm").write_text(statm)

    mem_dir = mem_mount / CGROUP_PATH.lstrip("/")
    cpu_dir = cpu_mount / CGROUP_PATH.lstrip("/")
    mem_dir.mkdir(parents=True)
    cpu_dir.mkdir(parents=True)

    for d, fname, value in [
        (mem_dir, "memory.limit_in_bytes", mem_limit),
        (cpu_dir, "cpu.cfs_quota_us", cfs_quota),
        (cpu_dir, "cpu.cfs_period_us", cfs_period),
    ]:
        if value is not None:
            (d / fname).write_text(value)

    return ProcPaths.under(proc)


@pytest.fixture
def proc_paths(tmp_path):
    return write_proc(tmp_path)


@pytest.fixture
def mk_proc(tmp_path):
    def _mk(name=None, **kw):
        root = tmp_path if name is None else tmp_path / name
        return write_proc(root, **kw)

    return _mk


@pytest.fixture
def missing_paths(tmp_path):
    return ProcPaths.under(tmp_path / "no-such-dir")
