# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
detectscan package entrypoint.

A pipeline step that downloads the Synopsys Detect script, builds its command
line from a ScanConfig, runs it through a shell and checks the resulting policy
report. Download, shell and file access sit behind injectable interfaces.
"""

from .config import DetectSettings, HttpSettings, load_detect_settings, load_http_settings
from .detect import (
    DetectRunner,
    HttpDownloader,
    LocalFileSystem,
    SubprocessShellRunner,
    build_detect_args,
    run_detect,
)
from .errors import (
    DetectScanError,
    DownloadError,
    ErrorCategory,
    ExecutionError,
    PolicyViolationError,
    ReportError,
)
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, create_default_http_client
from .log import setup_logging
from .models import PolicyReport, ScanConfig, ScanResult, ScanStatus
from .runtime import DetectScan
from .version import __version__

__all__ = [
    "DetectRunner",
    "DetectScan",
    "DetectScanError",
    "DetectSettings",
    "DownloadError",
    "ErrorCategory",
    "ExecutionError",
    "HttpClient",
    "HttpDownloader",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "LocalFileSystem",
    "PolicyReport",
    "PolicyViolationError",
    "ReportError",
    "ScanConfig",
    "ScanResult",
    "ScanStatus",
    "SubprocessShellRunner",
    "build_detect_args",
    "create_default_http_client",
    "load_detect_settings",
    "load_http_settings",
    "run_detect",
    "setup_logging",
    "__version__",
]
