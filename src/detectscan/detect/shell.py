# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shell execution seam for running the Detect script."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from ..errors import ExecutionError

logger = logging.getLogger(__name__)


class ShellRunner(Protocol):
    """Runs a command string through a shell; raises ExecutionError on non-zero exit."""

    def run_shell(self, shell: str, script: str, *, cwd: str = ".", env: Mapping[str, str] | None = None) -> None: ...


class SubprocessShellRunner(ShellRunner):
    """ShellRunner backed by ``subprocess``; output streams straight to the parent's stdout/stderr."""

    def run_shell(self, shell: str, script: str, *, cwd: str = ".", env: Mapping[str, str] | None = None) -> None:
        process_env = dict(os.environ)
        if env:
            process_env.update(env)
        try:
            completed = subprocess.run([shell, "-c", script], cwd=cwd, env=process_env, check=False)
        except OSError as exc:
            raise ExecutionError(f"failed to start {shell}: {exc}") from exc
        if completed.returncode != 0:
            raise ExecutionError(f"exit status {completed.returncode}", exit_code=completed.returncode)


@dataclass
class RecordingShellRunner(ShellRunner):
    """
    ShellRunner that records calls instead of executing them.

    ``fail_on_command`` maps exact command strings to the exception raised for them.
    """

    fail_on_command: dict[str, Exception] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    shells: list[str] = field(default_factory=list)
    dirs: list[str] = field(default_factory=list)
    envs: list[dict[str, str]] = field(default_factory=list)

    def run_shell(self, shell: str, script: str, *, cwd: str = ".", env: Mapping[str, str] | None = None) -> None:
        self.shells.append(shell)
        self.calls.append(script)
        self.dirs.append(cwd)
        self.envs.append(dict(env or {}))
        error = self.fail_on_command.get(script)
        if error is not None:
            raise error
