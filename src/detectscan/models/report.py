# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclasses for policy reports and scan results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ScanStatus(str, Enum):
    SUCCESS = "SUCCESS"
    POLICY_VIOLATION = "POLICY_VIOLATION"
    FAILURE = "FAILURE"


@dataclass
class PolicyReport:
    """Outcome of the post-scan policy check, persisted as the IP report."""

    policy_violations: int = 0
    risk_reports: list[str] = field(default_factory=list)
    source: str | None = None

    @property
    def passed(self) -> bool:
        return self.policy_violations == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "policyViolations": self.policy_violations,
            "riskReports": list(self.risk_reports),
            "source": self.source,
        }


@dataclass
class ScanResult:
    """What a scan run did: the (masked) command line and the optional policy report."""

    status: ScanStatus
    command: str
    report: PolicyReport | None = None
    error: str | None = None
    exit_code: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "command": self.command,
            "report": self.report.to_dict() if self.report else None,
            "error": self.error,
            "exit_code": self.exit_code,
        }
