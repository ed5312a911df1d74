# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""detectscan CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import load_detect_settings
from ..errors import DetectScanError, ExecutionError, PolicyViolationError
from ..http import create_default_http_client
from ..log import setup_logging
from ..models import ScanConfig, ScanResult, ScanStatus
from ..runtime import DetectScan

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_POLICY_VIOLATION = 3

# Option dests match ScanConfig field names; list options take comma-separated values.
_LIST_OPTIONS = (
    "scan_properties",
    "fail_on",
    "scanners",
    "scan_paths",
    "groups",
    "included_package_managers",
    "excluded_package_managers",
    "maven_excluded_scopes",
    "detect_tools",
    "custom_environment_variables",
)
_SCALAR_OPTIONS = (
    "server_url",
    "token",
    "project_name",
    "version",
    "versioning_model",
    "code_location",
    "dependency_path",
    "m2_path",
    "project_settings_file",
    "global_settings_file",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Download and run Synopsys Detect against the current project",
        allow_abbrev=False,
    )
    parser.add_argument("--config", help="JSON file with scan options (snake_case or step parameter names)")
    parser.add_argument("--server-url", help="Black Duck server URL")
    parser.add_argument("--token", help="Black Duck API token")
    parser.add_argument("--project-name", help="Black Duck project name")
    parser.add_argument("--version", help="Project version")
    parser.add_argument("--versioning-model", choices=["major", "major-minor", "semantic", "full"])
    parser.add_argument("--code-location", help="Code location name (default: <project>/<version>)")
    parser.add_argument("--dependency-path", help="Source path handed to Detect")
    parser.add_argument("--m2-path", help="Maven local repository path")
    parser.add_argument("--project-settings-file", help="Maven project settings file or URL")
    parser.add_argument("--global-settings-file", help="Maven global settings file or URL")
    parser.add_argument("--unmap", action="store_true", default=None, help="Unmap previous code locations")
    parser.add_argument("--scan-on-changes", action="store_true", default=None, help="Run a rapid scan with --report")
    for name in _LIST_OPTIONS:
        parser.add_argument(f"--{name.replace('_', '-')}", help="Comma-separated list")
    parser.add_argument("--json", action="store_true", help="Output JSON instead of a human-friendly summary")
    parser.add_argument("--ignore-ssl-errors", action="store_true", help="Skip TLS verification for downloads")
    parser.add_argument("--log-level", help="Logging level (default: DETECTSCAN_LOG_LEVEL or WARNING)")
    parser.add_argument(
        "extra_args",
        nargs="*",
        help="Detect properties passed before generated ones, e.g. --detect.timeout=600 (put them after -- if they clash with options above)",
    )
    return parser


def load_scan_config(args: argparse.Namespace) -> ScanConfig:
    """Merge the optional JSON config file with command-line options (options win)."""
    data: dict[str, Any] = {}
    if args.config:
        with open(args.config, encoding="utf-8") as handle:
            loaded = json.load(handle)
        if not isinstance(loaded, dict):
            raise ValueError(f"{args.config} must contain a JSON object")
        data.update(loaded)
    for name in (*_SCALAR_OPTIONS, *_LIST_OPTIONS):
        value = getattr(args, name)
        if value is not None:
            data[name] = value
    for name in ("unmap", "scan_on_changes"):
        if getattr(args, name):
            data[name] = True
    return ScanConfig.from_mapping(data)


def _print_json(data: dict[str, Any] | Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(result: dict[str, Any] | Any) -> None:
    payload = result.to_dict() if hasattr(result, "to_dict") else result
    if not isinstance(payload, dict):
        print(payload)
        return
    print(f"[detectscan] Status: {payload.get('status')}")
    if payload.get("command"):
        print(f"Command: {payload['command']}")
    if payload.get("error"):
        print(f"Error: {payload['error']}")
    report = payload.get("report") or {}
    if report:
        print(f"Policy violations: {report.get('policyViolations', 0)}")
        risk_reports = report.get("riskReports") or []
        if risk_reports:
            print(f"Risk reports: {', '.join(risk_reports)}")


def parse_args(parser: argparse.ArgumentParser, argv: list[str] | None = None) -> argparse.Namespace:
    """Parse options; unrecognised --name=value items are treated as Detect pass-through properties."""
    args, unknown = parser.parse_known_args(argv)
    rejected = [item for item in unknown if not (item.startswith("--") and "=" in item)]
    if rejected:
        parser.error(f"unrecognized arguments: {' '.join(rejected)}")
    args.extra_args = [*unknown, *args.extra_args]
    return args


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parse_args(parser, argv)
    setup_logging(args.log_level)

    try:
        config = load_scan_config(args)
    except (OSError, ValueError) as exc:
        print(f"detectscan: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_USAGE

    http_client = create_default_http_client(verify_ssl=False if args.ignore_ssl_errors else None)
    scan = DetectScan(http_client=http_client, settings=load_detect_settings())
    exit_code = EXIT_OK
    try:
        with scan:
            result = scan.scan(config, args.extra_args)
    except PolicyViolationError as exc:
        result = ScanResult(status=ScanStatus.POLICY_VIOLATION, command=scan.last_command, report=exc.report, error=str(exc))
        exit_code = EXIT_POLICY_VIOLATION
    except ExecutionError as exc:
        result = ScanResult(status=ScanStatus.FAILURE, command=scan.last_command, error=str(exc), exit_code=exc.exit_code)
        exit_code = EXIT_FAILURE
    except DetectScanError as exc:
        result = ScanResult(status=ScanStatus.FAILURE, command=scan.last_command, error=str(exc))
        exit_code = EXIT_FAILURE

    if args.json:
        _print_json(result)
    else:
        _pretty_print(result)

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
