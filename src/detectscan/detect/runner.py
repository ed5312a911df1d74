# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run a Detect scan: download the script, build its command line, execute, clean up, check policy."""

from __future__ import annotations

import logging
from dataclasses import replace

from ..config import DetectSettings, load_detect_settings
from ..errors import ExecutionError, PolicyViolationError, detect_exit_code_reason
from ..log import mask_secrets
from ..models.report import PolicyReport, ScanResult, ScanStatus
from ..models.scan import ScanConfig
from .args import build_detect_args
from .download import Downloader
from .files import FileSystem
from .report import build_policy_report, write_ip_report
from .shell import ShellRunner

logger = logging.getLogger(__name__)

SCRIPT_MODE = 0o700
GLOBAL_SETTINGS_TARGET = ".pipeline/mavenGlobalSettings.xml"
PROJECT_SETTINGS_TARGET = ".pipeline/mavenProjectSettings.xml"


def _is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))


class DetectRunner:
    """
    Executes one scan with injected collaborators.

    Failures surface immediately: a download error aborts before anything runs,
    and the shell's error propagates as-is. The script is removed whether or not
    the execution succeeded.
    """

    def __init__(
        self,
        downloader: Downloader,
        shell: ShellRunner,
        files: FileSystem,
        settings: DetectSettings | None = None,
    ):
        self.downloader = downloader
        self.shell = shell
        self.files = files
        self.settings = settings or load_detect_settings()
        # Masked command line of the most recent run, kept for failure reporting.
        self.last_command = ""

    def run(self, config: ScanConfig, args: list[str] | None = None) -> ScanResult:
        script = self.settings.script_name
        self.last_command = ""
        self.downloader.download_file(self.settings.script_url, script)

        try:
            self.files.chmod(script, SCRIPT_MODE)
            config = self._resolve_maven_settings(config)
            detect_args = build_detect_args([f"./{script}", *(args or [])], config, working_dir=self.files.getcwd())
            command = " ".join(detect_args)
            masked = " ".join(mask_secrets(detect_args))
            self.last_command = masked
            logger.info("Running Detect: %s", masked)
            try:
                self.shell.run_shell(
                    self.settings.shell,
                    command,
                    cwd=self.settings.working_dir,
                    env=self.environment(config),
                )
            except ExecutionError as exc:
                logger.error("Detect scan failed: %s", detect_exit_code_reason(exc.exit_code))
                raise
        finally:
            self._remove_script(script)

        report = self._check_policy(config) if config.fail_on else None
        return ScanResult(status=ScanStatus.SUCCESS, command=masked, report=report)

    def environment(self, config: ScanConfig) -> dict[str, str]:
        env: dict[str, str] = {}
        if self.settings.skip_phone_home:
            env["BLACKDUCK_SKIP_PHONE_HOME"] = "true"
        for entry in config.custom_environment_variables:
            name, sep, value = entry.partition("=")
            if not sep or not name.strip():
                logger.warning("Ignoring malformed environment variable %r (expected NAME=value)", entry)
                continue
            env[name.strip()] = value
        return env

    def _resolve_maven_settings(self, config: ScanConfig) -> ScanConfig:
        updates: dict[str, str] = {}
        if config.global_settings_file and _is_remote(config.global_settings_file):
            self.downloader.download_file(config.global_settings_file, GLOBAL_SETTINGS_TARGET)
            updates["global_settings_file"] = GLOBAL_SETTINGS_TARGET
        if config.project_settings_file and _is_remote(config.project_settings_file):
            self.downloader.download_file(config.project_settings_file, PROJECT_SETTINGS_TARGET)
            updates["project_settings_file"] = PROJECT_SETTINGS_TARGET
        return replace(config, **updates) if updates else config

    def _remove_script(self, script: str) -> None:
        try:
            self.files.remove(script)
        except OSError as exc:
            logger.warning("failed to delete '%s' script: %s", script, exc)

    def _check_policy(self, config: ScanConfig) -> PolicyReport:
        report = build_policy_report(self.files, self.settings.policy_report)
        write_ip_report(self.files, self.settings.ip_report, report)
        if not report.passed:
            logger.error(
                "Policy check failed: %d violation(s) for severities %s",
                report.policy_violations,
                ",".join(config.fail_on),
            )
            raise PolicyViolationError(report.policy_violations, report_path=self.settings.ip_report, report=report)
        return report


def run_detect(
    config: ScanConfig,
    *,
    downloader: Downloader,
    shell: ShellRunner,
    files: FileSystem,
    settings: DetectSettings | None = None,
    args: list[str] | None = None,
) -> ScanResult:
    """Functional shortcut around DetectRunner."""
    return DetectRunner(downloader, shell, files, settings).run(config, args)
