# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for detectscan."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .report import PolicyReport, ScanResult, ScanStatus
from .scan import ScanConfig

__all__ = [
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "PolicyReport",
    "ScanConfig",
    "ScanResult",
    "ScanStatus",
]
