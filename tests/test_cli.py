from click.testing import CliRunner
from cglimits.cli import main


def test_cli(proc_paths, tmp_path, monkeypatch):
    monkeypatch.setattr("cglimits.proc.get_total_memory", lambda: 8 * 1024 ** 3)
    monkeypatch.setattr("cglimits.proc.get_address_space_limit", lambda: None)
    monkeypatch.setattr("cglimits.proc.get_page_size", lambda: 4096)

    result = CliRunner().invoke(main, ["--proc-root", str(tmp_path / "proc")])
    assert result.exit_code == 0, result.output
    assert "memory limit: 2,147,483,648" in result.output
    assert "cpu limit:    2" in result.output
    assert "working set:  10,240,000" in result.output


def test_cli_no_limits(tmp_path, monkeypatch):
    monkeypatch.setattr("cglimits.proc.get_total_memory", lambda: None)
    monkeypatch.setattr("cglimits.proc.get_address_space_limit", lambda: None)

    result = CliRunner().invoke(main, ["--proc-root", str(tmp_path), "-v"])
    assert result.exit_code == 0, result.output
    assert "memory limit: unlimited" in result.output
    assert "cpu limit:    unknown" in result.output
    assert "working set:  unknown" in result.output


def test_cli_bad_root(tmp_path):
    result = CliRunner().invoke(main, ["--proc-root", str(tmp_path / "nope")])
    assert result.exit_code != 0
