# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client used to fetch the Detect script and maven settings files."""

from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from ..config import HttpSettings, load_http_settings
from ..errors import DownloadError, ErrorCategory, categorize_error_type, error_category_to_reason
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    Issues a single request and returns the whole response.

    Transport failures are reported as ``ok=False`` responses without a status
    code rather than raised.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None: ...


def create_default_http_client(settings: HttpSettings | None = None, *, verify_ssl: bool | None = None) -> HttpClient:
    """Build the httpx-backed client; ``verify_ssl`` overrides the loaded settings when given."""
    from .httpx_client import HttpxClient

    settings = settings or load_http_settings()
    if verify_ssl is not None:
        settings = replace(settings, verify_ssl=verify_ssl)
    return HttpxClient(settings)


def fetch_bytes(client: HttpClient, url: str) -> bytes:
    """GET ``url`` and return the complete body, or raise DownloadError."""
    response = client.request(HttpRequest(url=url))

    if response.status_code is None:
        category = categorize_error_type(response.error_type)
        detail = response.error_message or error_category_to_reason(category)
        raise DownloadError(f"failed to download {url}: {detail}", url=url, category=category)

    if response.is_error_status:
        raise DownloadError(
            f"failed to download {url}: HTTP {response.status_code}",
            url=url,
            status_code=response.status_code,
            category=ErrorCategory.HTTP_ERROR,
        )

    # A partial script must never reach the shell.
    if response.meta.get("body_truncated"):
        raise DownloadError(
            f"failed to download {url}: response body exceeded the size limit",
            url=url,
            status_code=response.status_code,
            category=ErrorCategory.HTTP_ERROR,
        )

    return response.content
