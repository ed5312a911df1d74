# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import Any

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class DetectScanError(Exception):
    """Base class for errors raised by the scan step."""


class DownloadError(DetectScanError):
    """The Detect script (or a settings file) could not be fetched."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.category = category


class ExecutionError(DetectScanError):
    """The shell command exited with a non-zero status."""

    def __init__(self, message: str, *, exit_code: int | None = None):
        super().__init__(message)
        self.exit_code = exit_code


class PolicyViolationError(DetectScanError):
    """The scan finished but the project violates configured policies."""

    def __init__(self, violations: int, *, report_path: str | None = None, report: Any = None):
        super().__init__(f"{violations} policy violation(s) found")
        self.violations = violations
        self.report_path = report_path
        self.report = report


class ReportError(DetectScanError):
    """A policy report exists but cannot be interpreted."""


_DETECT_EXIT_CODES: dict[int, str] = {
    0: "SUCCESS",
    1: "FAILURE_BLACKDUCK_CONNECTIVITY => Detect was unable to connect to Black Duck. Check your configuration and connection.",
    2: "FAILURE_TIMEOUT => Detect could not wait for actions to be completed on Black Duck. Check your Black Duck server or increase your timeout.",
    3: "FAILURE_POLICY_VIOLATION => Detect found policy violations.",
    4: "FAILURE_PROXY_CONNECTIVITY => Detect was unable to use the configured proxy. Check your configuration and connection.",
    5: "FAILURE_DETECTOR => Detect had one or more detector failures while extracting dependencies. Check that all projects build and your environment is configured correctly.",
    6: "FAILURE_SCAN => Detect was unable to run the signature scanner against your source. Check your configuration.",
    7: "FAILURE_CONFIGURATION => Detect was unable to start due to issues with its configuration. Check and fix your configuration.",
    9: "FAILURE_DETECTOR_REQUIRED => Detect did not run all of the required detectors. Fix detector issues or disable required detectors.",
    10: "FAILURE_BLACKDUCK_VERSION_NOT_SUPPORTED => Detect attempted an operation that was not supported by your version of Black Duck.",
    11: "FAILURE_BLACKDUCK_FEATURE_ERROR => Detect encountered an error while attempting an operation on Black Duck.",
    12: "FAILURE_POLARIS_CONNECTIVITY => Detect was unable to connect to Polaris. Check your configuration and connection.",
    99: "FAILURE_GENERAL_ERROR => Detect encountered a known error, details of the error are provided.",
    100: "FAILURE_UNKNOWN_ERROR => Detect encountered an unknown error.",
}


def detect_exit_code_reason(exit_code: int | None) -> str:
    """Human-readable meaning of a Detect exit code."""
    if exit_code is None:
        return "Detect did not report an exit code"
    return _DETECT_EXIT_CODES.get(exit_code, f"Detect exited with unmapped code {exit_code}")


def _categorize_class(exc_class: type[BaseException]) -> ErrorCategory:
    if issubclass(exc_class, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if issubclass(exc_class, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if issubclass(exc_class, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if issubclass(exc_class, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if issubclass(exc_class, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    return _categorize_class(type(exc))


def categorize_error_type(error_type: str | None) -> ErrorCategory:
    """Classify an exception class name recorded on an HttpResponse."""
    if not error_type:
        return ErrorCategory.UNKNOWN_ERROR
    exc_class = getattr(httpx, error_type, None) or getattr(ssl_module, error_type, None) or getattr(socket, error_type, None)
    if isinstance(exc_class, type) and issubclass(exc_class, BaseException):
        return _categorize_class(exc_class)
    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during download",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.HTTP_ERROR: "Server answered with an error status",
        ErrorCategory.UNKNOWN_ERROR: "Network error during download",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Download failed due to network error")
