"""
Tests for gitopolis.services.exec_service fan-out.

Tests cover:
- Visiting repos in order and dispatching to the right executor
- Skipping missing folders without stopping
- Exit code and summary lines
- End-to-end runs through /bin/sh
"""
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from gitopolis.domain.execution import ExecutionOutcome, RunSummary
from gitopolis.domain.repository import Repo
from gitopolis.exit_codes import ShellSpawnError
from gitopolis.infra.shell import ShellKind, ShellResolution
from gitopolis.services.exec_service import ExecService

SH = ShellResolution('/bin/sh', ('-c',), ShellKind.POSIX_LIKE)

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="needs /bin/sh")


def make_dirs(base: Path, *names: str) -> None:
    for name in names:
        (base / name).mkdir(parents=True)


class FakeExecutor:
    """Records invocations and answers with canned outcomes."""

    def __init__(self, failing=(), text=None):
        self.failing = set(failing)
        self.text = text
        self.invocations = []

    def __call__(self, invocation):
        self.invocations.append(invocation)
        failed = Path(invocation.cwd).name in self.failing
        return ExecutionOutcome(
            repo_path=invocation.cwd,
            exit_success=not failed,
            exit_code=1 if failed else 0,
            captured_text=self.text,
        )


class TestRunSummary:

    def test_clean_run_exits_zero(self):
        summary = RunSummary()
        assert not summary.has_problems
        assert summary.exit_code == 0

    def test_failure_exits_one(self):
        summary = RunSummary()
        summary.record(ExecutionOutcome(repo_path="a", exit_success=False, exit_code=2))
        assert summary.failed_count == 1
        assert summary.exit_code == 1

    def test_skip_exits_one(self):
        summary = RunSummary()
        summary.record_skip()
        assert summary.skipped_count == 1
        assert summary.exit_code == 1


class TestExecServiceDispatch:
    """Fan-out with fake executors."""

    def test_visits_repos_in_list_order(self, tmp_path):
        make_dirs(tmp_path, "c", "a", "b")
        streamer = FakeExecutor()
        service = ExecService(shell=SH, base_dir=tmp_path, streamer=streamer)

        repos = [Repo(path="c"), Repo(path="a"), Repo(path="b")]
        summary = service.run(repos, ["git", "status"])

        assert [Path(i.cwd).name for i in streamer.invocations] == ["c", "a", "b"]
        assert summary.exit_code == 0

    def test_oneline_uses_capturer(self, tmp_path, capsys):
        make_dirs(tmp_path, "a")
        streamer, capturer = FakeExecutor(), FakeExecutor(text="main")
        service = ExecService(shell=SH, base_dir=tmp_path, streamer=streamer, capturer=capturer)

        service.run([Repo(path="a")], ["git branch --show-current"], oneline=True)

        assert streamer.invocations == []
        assert len(capturer.invocations) == 1
        assert capsys.readouterr().out == "a\tmain\n"

    def test_oneline_without_output_prints_empty_field(self, tmp_path, capsys):
        make_dirs(tmp_path, "a")
        service = ExecService(shell=SH, base_dir=tmp_path, capturer=FakeExecutor(text=None))
        service.run([Repo(path="a")], ["true"], oneline=True)
        assert capsys.readouterr().out == "a\t\n"

    def test_missing_folders_skipped_and_counted(self, tmp_path, capsys):
        make_dirs(tmp_path, "a", "c")
        streamer = FakeExecutor()
        service = ExecService(shell=SH, base_dir=tmp_path, streamer=streamer)

        repos = [Repo(path="a"), Repo(path="gone1"), Repo(path="c"), Repo(path="gone2")]
        summary = service.run(repos, ["ls"])

        assert [Path(i.cwd).name for i in streamer.invocations] == ["a", "c"]
        assert summary.skipped_count == 2
        assert summary.failed_count == 0
        assert summary.exit_code == 1
        captured = capsys.readouterr()
        assert "🏢 gone1> Repo folder missing, skipped." in captured.out
        assert "2 repos skipped because their folder is missing" in captured.err

    def test_missing_folder_oneline(self, tmp_path, capsys):
        service = ExecService(shell=SH, base_dir=tmp_path, capturer=FakeExecutor())
        service.run([Repo(path="gone")], ["ls"], oneline=True)
        assert capsys.readouterr().out == "gone\tRepo folder missing, skipped.\n"

    def test_failures_counted_and_loop_continues(self, tmp_path, capsys):
        make_dirs(tmp_path, "a", "b", "c")
        streamer = FakeExecutor(failing={"a", "b"})
        service = ExecService(shell=SH, base_dir=tmp_path, streamer=streamer)

        summary = service.run([Repo(path="a"), Repo(path="b"), Repo(path="c")], ["make"])

        assert len(streamer.invocations) == 3
        assert summary.failed_count == 2
        assert summary.exit_code == 1
        assert "2 commands exited with non-zero status code" in capsys.readouterr().err

    def test_no_summary_lines_when_all_good(self, tmp_path, capsys):
        make_dirs(tmp_path, "a")
        ExecService(shell=SH, base_dir=tmp_path, streamer=FakeExecutor()).run([Repo(path="a")], ["ls"])
        assert capsys.readouterr().err == ""

    def test_header_uses_display_format(self, tmp_path, capsys):
        make_dirs(tmp_path, "a")
        ExecService(shell=SH, base_dir=tmp_path, streamer=FakeExecutor()).run(
            [Repo(path="a")], ["git", "commit", "-m", "two words"]
        )
        assert capsys.readouterr().out == "\n🏢 a> git commit -m 'two words'\n\n"

    def test_spawn_error_aborts_run(self, tmp_path):
        make_dirs(tmp_path, "a", "b")
        streamer = MagicMock(side_effect=ShellSpawnError("/bin/nope"))
        service = ExecService(shell=SH, base_dir=tmp_path, streamer=streamer)

        with pytest.raises(ShellSpawnError):
            service.run([Repo(path="a"), Repo(path="b")], ["ls"])
        assert streamer.call_count == 1

    def test_relative_to_working_directory_by_default(self, tmp_path, monkeypatch):
        make_dirs(tmp_path, "a")
        monkeypatch.chdir(tmp_path)
        streamer = FakeExecutor()
        summary = ExecService(shell=SH, streamer=streamer).run([Repo(path="a"), Repo(path="b")], ["ls"])
        assert [i.cwd for i in streamer.invocations] == ["a"]
        assert summary.skipped_count == 1


@posix_only
class TestExecServiceEndToEnd:
    """Real processes through /bin/sh."""

    def test_echo_hello_in_two_repos(self, tmp_path, capsys):
        make_dirs(tmp_path, "a", "b")
        summary = ExecService(shell=SH, base_dir=tmp_path).run(
            [Repo(path="a"), Repo(path="b")], ["echo", "hello"]
        )
        assert summary.exit_code == 0
        assert capsys.readouterr().out == (
            "\n🏢 a> echo hello\nhello\n\n"
            "\n🏢 b> echo hello\nhello\n\n"
        )

    def test_oneline_is_sortable(self, tmp_path, capsys):
        make_dirs(tmp_path, "b", "a")
        (tmp_path / "a" / "f.txt").write_text("x")
        ExecService(shell=SH, base_dir=tmp_path).run(
            [Repo(path="b"), Repo(path="a")], ["ls"], oneline=True
        )
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["b\t", "a\tf.txt"]

    def test_absent_repo_does_not_stop_others(self, tmp_path, capsys):
        make_dirs(tmp_path, "a", "c")
        summary = ExecService(shell=SH, base_dir=tmp_path).run(
            [Repo(path="a"), Repo(path="b"), Repo(path="c")], ["echo hi"], oneline=True
        )
        assert capsys.readouterr().out.splitlines() == [
            "a\thi",
            "b\tRepo folder missing, skipped.",
            "c\thi",
        ]
        assert summary.skipped_count == 1
        assert summary.exit_code == 1
