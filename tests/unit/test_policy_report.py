# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from detectscan.detect.files import MemoryFileSystem
from detectscan.detect.report import (
    build_policy_report,
    extract_policy_violations,
    find_risk_reports,
    read_policy_violations,
    write_ip_report,
)
from detectscan.errors import ReportError
from detectscan.models import PolicyReport


def test_extract_policy_violations_shapes():
    assert extract_policy_violations({"policyViolations": 0}) == 0
    assert extract_policy_violations({"violations": [{"name": "a"}, {"name": "b"}]}) == 2
    status = {
        "policyStatus": {
            "overallStatus": "IN_VIOLATION",
            "componentVersionStatusCounts": [
                {"name": "NOT_IN_VIOLATION", "value": 10},
                {"name": "IN_VIOLATION", "value": 3},
            ],
        }
    }
    assert extract_policy_violations(status) == 3
    assert extract_policy_violations({"componentVersionStatusCounts": [{"name": "NOT_IN_VIOLATION", "value": 4}]}) == 0


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"policyViolations": -1},
        {"policyViolations": "3"},
        {"policyViolations": True},
        {"unrelated": 1},
        {"componentVersionStatusCounts": [{"name": "IN_VIOLATION", "value": "many"}]},
    ],
)
def test_extract_policy_violations_rejects_malformed_documents(document):
    with pytest.raises(ReportError):
        extract_policy_violations(document)


def test_read_policy_violations_missing_file_counts_as_zero():
    assert read_policy_violations(MemoryFileSystem(), "blackduck-policy.json") == 0


def test_read_policy_violations_invalid_json():
    files = MemoryFileSystem({"blackduck-policy.json": b"{not json"})
    with pytest.raises(ReportError, match="unable to parse"):
        read_policy_violations(files, "blackduck-policy.json")


def test_find_risk_reports_matches_detect_naming():
    files = MemoryFileSystem()
    files.add_file("my_BlackDuck_RiskReport.pdf")
    files.add_file("other_BlackDuck_RiskReport.pdf")
    files.add_file("notes.pdf")
    assert find_risk_reports(files) == ["my_BlackDuck_RiskReport.pdf", "other_BlackDuck_RiskReport.pdf"]


def test_build_and_write_ip_report():
    files = MemoryFileSystem()
    files.add_file("blackduck-policy.json", json.dumps({"policyViolations": 1}))
    files.add_file("p_BlackDuck_RiskReport.pdf")

    report = build_policy_report(files, "blackduck-policy.json")
    assert report == PolicyReport(policy_violations=1, risk_reports=["p_BlackDuck_RiskReport.pdf"], source="blackduck-policy.json")
    assert report.passed is False

    write_ip_report(files, "blackduck-ip.json", report)
    content = files.read_file("blackduck-ip.json").decode("utf-8")
    assert '"policyViolations":1' in content
    assert json.loads(content)["riskReports"] == ["p_BlackDuck_RiskReport.pdf"]
