# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Detect scan step: argument construction plus the collaborators that run it."""

from .args import apply_versioning_model, build_detect_args, maven_build_command
from .download import Downloader, HttpDownloader
from .files import FileSystem, LocalFileSystem, MemoryFileSystem
from .report import build_policy_report, extract_policy_violations, read_policy_violations, write_ip_report
from .runner import DetectRunner, run_detect
from .shell import RecordingShellRunner, ShellRunner, SubprocessShellRunner

__all__ = [
    "DetectRunner",
    "Downloader",
    "FileSystem",
    "HttpDownloader",
    "LocalFileSystem",
    "MemoryFileSystem",
    "RecordingShellRunner",
    "ShellRunner",
    "SubprocessShellRunner",
    "apply_versioning_model",
    "build_detect_args",
    "build_policy_report",
    "extract_policy_violations",
    "maven_build_command",
    "read_policy_violations",
    "run_detect",
    "write_ip_report",
]
