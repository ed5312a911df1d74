# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fetch remote files (the Detect script, maven settings) onto the file system."""

from __future__ import annotations

import logging
from typing import Protocol

from ..http.client import HttpClient, fetch_bytes
from .files import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)


class Downloader(Protocol):
    def download_file(self, url: str, filename: str) -> None: ...


class HttpDownloader(Downloader):
    """Downloader that issues a GET through an HttpClient and writes the body to disk."""

    def __init__(self, http_client: HttpClient, files: FileSystem | None = None):
        self.http_client = http_client
        self.files = files or LocalFileSystem()

    def download_file(self, url: str, filename: str) -> None:
        logger.info("Downloading %s to %s", url, filename)
        content = fetch_bytes(self.http_client, url)
        self.files.write_file(filename, content)
        logger.debug("Wrote %d bytes to %s", len(content), filename)
