# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Post-scan policy inspection and the IP report written for the pipeline."""

from __future__ import annotations

import json
import logging
from typing import Any

from ..errors import ReportError
from ..models.report import PolicyReport
from .files import FileSystem

logger = logging.getLogger(__name__)

RISK_REPORT_PATTERN = "*BlackDuck_RiskReport.pdf"
IN_VIOLATION = "IN_VIOLATION"


def find_risk_reports(files: FileSystem, pattern: str = RISK_REPORT_PATTERN) -> list[str]:
    """Risk report PDFs Detect left in the working directory."""
    return files.glob(pattern)


def extract_policy_violations(document: Any) -> int:
    """
    Pull a violation count out of a policy status document.

    Accepts ``{"policyViolations": N}``, ``{"violations": [...]}`` or the Black Duck
    policy-status shape with an ``IN_VIOLATION`` entry under
    ``componentVersionStatusCounts``.
    """
    if not isinstance(document, dict):
        raise ReportError("policy report must be a JSON object")

    if "policyViolations" in document:
        value = document["policyViolations"]
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ReportError(f"policyViolations must be a non-negative integer, got {value!r}")
        return value

    if isinstance(document.get("violations"), list):
        return len(document["violations"])

    status = document.get("policyStatus", document)
    counts = status.get("componentVersionStatusCounts") if isinstance(status, dict) else None
    if isinstance(counts, list):
        for entry in counts:
            if isinstance(entry, dict) and entry.get("name") == IN_VIOLATION:
                try:
                    return int(entry.get("value") or 0)
                except (TypeError, ValueError) as exc:
                    raise ReportError(f"invalid {IN_VIOLATION} count {entry.get('value')!r}") from exc
        return 0

    raise ReportError("policy report does not contain a violation count")


def read_policy_violations(files: FileSystem, path: str) -> int:
    """Violation count from ``path``; a missing report counts as zero."""
    if not files.exists(path):
        logger.debug("No policy report at %s", path)
        return 0
    try:
        document = json.loads(files.read_file(path).decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ReportError(f"unable to parse policy report {path}: {exc}") from exc
    return extract_policy_violations(document)


def build_policy_report(files: FileSystem, policy_report_path: str) -> PolicyReport:
    risk_reports = find_risk_reports(files)
    for name in risk_reports:
        logger.info("Found risk report %s", name)
    violations = read_policy_violations(files, policy_report_path)
    source = policy_report_path if files.exists(policy_report_path) else None
    return PolicyReport(policy_violations=violations, risk_reports=risk_reports, source=source)


def write_ip_report(files: FileSystem, path: str, report: PolicyReport) -> None:
    """Persist the report as compact JSON for downstream pipeline steps."""
    payload = json.dumps(report.to_dict(), separators=(",", ":"))
    files.write_file(path, payload.encode("utf-8"))
    logger.info("Wrote policy report %s (%d violation(s))", path, report.policy_violations)
