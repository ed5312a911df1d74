# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import os
import stat

import pytest

from detectscan.detect.files import LocalFileSystem, MemoryFileSystem
from detectscan.detect.shell import RecordingShellRunner, SubprocessShellRunner
from detectscan.errors import ExecutionError


def test_local_file_system_round_trip(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    files = LocalFileSystem()

    files.write_file("nested/detect.sh", b"echo hi\n")
    files.chmod("nested/detect.sh", 0o700)
    files.write_file("a_BlackDuck_RiskReport.pdf", b"%PDF")

    assert files.exists("nested/detect.sh")
    assert files.read_file("nested/detect.sh") == b"echo hi\n"
    assert stat.S_IMODE(os.stat("nested/detect.sh").st_mode) == 0o700
    assert files.glob("*_RiskReport.pdf") == ["a_BlackDuck_RiskReport.pdf"]
    assert files.getcwd() == os.path.realpath(tmp_path)

    files.remove("nested/detect.sh")
    assert not files.exists("nested/detect.sh")
    with pytest.raises(OSError):
        files.remove("nested/detect.sh")


def test_memory_file_system_tracks_removals():
    files = MemoryFileSystem(current_dir="root_folder")
    files.add_file("detect.sh", "echo")
    assert files.getcwd() == "/root_folder"
    assert files.read_file("detect.sh") == b"echo"
    files.remove("detect.sh")
    assert files.has_removed_file("detect.sh")
    with pytest.raises(FileNotFoundError):
        files.read_file("detect.sh")
    with pytest.raises(FileNotFoundError):
        files.chmod("detect.sh", 0o700)


def test_subprocess_shell_runner_success_and_env(tmp_path):
    runner = SubprocessShellRunner()
    runner.run_shell("/bin/sh", 'printf "%s" "$DETECT_MARKER" > marker.txt', cwd=str(tmp_path), env={"DETECT_MARKER": "ok"})
    assert (tmp_path / "marker.txt").read_text() == "ok"


def test_subprocess_shell_runner_non_zero_exit(tmp_path):
    with pytest.raises(ExecutionError) as excinfo:
        SubprocessShellRunner().run_shell("/bin/sh", "exit 5", cwd=str(tmp_path))
    assert excinfo.value.exit_code == 5
    assert str(excinfo.value) == "exit status 5"


def test_subprocess_shell_runner_missing_shell(tmp_path):
    with pytest.raises(ExecutionError, match="failed to start"):
        SubprocessShellRunner().run_shell(str(tmp_path / "no-such-shell"), "true", cwd=str(tmp_path))


def test_recording_shell_runner():
    runner = RecordingShellRunner(fail_on_command={"bad": RuntimeError("nope")})
    runner.run_shell("/bin/bash", "good", cwd="/work", env={"A": "1"})
    with pytest.raises(RuntimeError):
        runner.run_shell("/bin/bash", "bad")
    assert runner.calls == ["good", "bad"]
    assert runner.dirs == ["/work", "."]
    assert runner.envs[0] == {"A": "1"}
