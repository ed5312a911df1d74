# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade wiring the default collaborators for a Detect scan."""

from __future__ import annotations

from contextlib import suppress

from .config import DetectSettings, load_detect_settings
from .detect.download import Downloader, HttpDownloader
from .detect.files import FileSystem, LocalFileSystem
from .detect.runner import DetectRunner
from .detect.shell import ShellRunner, SubprocessShellRunner
from .http.client import HttpClient, create_default_http_client
from .models import ScanConfig, ScanResult


class DetectScan:
    """
    Convenience wrapper that owns the HTTP client and hands collaborators to DetectRunner.

    Any collaborator can be injected; the rest default to the httpx client, the
    local file system and a subprocess shell.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        settings: DetectSettings | None = None,
        files: FileSystem | None = None,
        shell: ShellRunner | None = None,
        downloader: Downloader | None = None,
    ):
        self.settings = settings or load_detect_settings()
        self.http_client = http_client or create_default_http_client()
        self.files = files or LocalFileSystem()
        self.shell = shell or SubprocessShellRunner()
        self.downloader = downloader or HttpDownloader(self.http_client, self.files)
        self.runner = DetectRunner(self.downloader, self.shell, self.files, self.settings)

    def scan(self, config: ScanConfig, args: list[str] | None = None) -> ScanResult:
        return self.runner.run(config, args)

    @property
    def last_command(self) -> str:
        return self.runner.last_command

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> DetectScan:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
