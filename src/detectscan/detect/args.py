# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Command-line construction for the Detect script.

`build_detect_args` is a pure function of its inputs: the same base arguments
and ScanConfig always give the same list, in the same order. Values are quoted
for the shell command line the runner assembles, not escaped; paths and names
are passed through untouched.
"""

from __future__ import annotations

import os
import re

from ..models.scan import ScanConfig

UNMAP_PREFIX = "--detect.project.codelocation.unmap"
UNMAP_TRUE = f"{UNMAP_PREFIX}=true"
UNMAP_FALSE = f"{UNMAP_PREFIX}=false"
REPORT_FLAG = "--report"
SIGNATURE_SCANNER = "signature"

_VERSION_RE = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def apply_versioning_model(model: str, version: str) -> str:
    """
    Reduce a version string to the granularity of a versioning model.

    ``major`` keeps ``1``, ``major-minor`` keeps ``1.2``, ``semantic`` keeps
    ``1.2.3`` (missing parts become ``0``). ``full``, an empty model and
    versions that do not start with a number are returned as-is.
    """
    match = _VERSION_RE.match(version or "")
    if not match:
        return version
    major, minor, patch = match.group(1), match.group(2) or "0", match.group(3) or "0"
    model = (model or "").strip().lower()
    if model == "major":
        return major
    if model == "major-minor":
        return f"{major}.{minor}"
    if model == "semantic":
        return f"{major}.{minor}.{patch}"
    return version


def _quoted(flag: str, value: str) -> str:
    return f"\"--{flag}='{value}'\""


def _resolve_path(path: str, working_dir: str | None) -> str:
    if os.path.isabs(path):
        return os.path.normpath(path)
    if working_dir is None:
        return os.path.abspath(path)
    return os.path.normpath(os.path.join(working_dir, path))


def maven_build_command(config: ScanConfig, *, working_dir: str | None = None) -> str | None:
    """Composite maven flag, or None when no maven option is configured."""
    maven_args: list[str] = []
    if config.global_settings_file:
        maven_args.append(f"--global-settings {config.global_settings_file}")
    if config.project_settings_file:
        maven_args.append(f"--settings {config.project_settings_file}")
    if config.m2_path:
        maven_args.append(f"-Dmaven.repo.local={_resolve_path(config.m2_path, working_dir)}")
    if not maven_args:
        return None
    return _quoted("detect.maven.build.command", " ".join(maven_args))


def build_detect_args(args: list[str], config: ScanConfig, *, working_dir: str | None = None) -> list[str]:
    """
    Append the Detect flags derived from ``config`` to a copy of ``args``.

    ``working_dir`` anchors a relative maven local repository path; when omitted
    the process working directory is used.
    """
    result = list(args)
    scan_properties = list(config.scan_properties)

    # Scan-on-changes runs a rapid scan, which never unmaps code locations.
    unmap = config.unmap and not config.scan_on_changes
    if config.scan_on_changes:
        result.append(REPORT_FLAG)

    if unmap:
        # Any unmap override already on the command line wins.
        if not any(arg.startswith(UNMAP_PREFIX) for arg in result) and UNMAP_TRUE not in scan_properties:
            result.append(UNMAP_TRUE)
        scan_properties = [prop for prop in scan_properties if prop != UNMAP_FALSE]
    else:
        scan_properties = [prop for prop in scan_properties if prop != UNMAP_TRUE]
    result.extend(scan_properties)

    version = apply_versioning_model(config.versioning_model, config.version)

    result.append(f"--blackduck.url={config.server_url}")
    result.append(f"--blackduck.api.token={config.token}")
    result.append(_quoted("detect.project.name", config.project_name))
    result.append(_quoted("detect.project.version.name", version))

    if config.groups:
        result.append(_quoted("detect.project.user.groups", ",".join(config.groups)))

    if config.fail_on:
        result.append(f"--detect.policy.check.fail.on.severities={','.join(config.fail_on)}")

    code_location = config.code_location
    if not code_location and config.project_name:
        code_location = f"{config.project_name}/{version}"
    result.append(_quoted("detect.code.location.name", code_location))

    if SIGNATURE_SCANNER in config.scanners:
        result.append(f"--detect.blackduck.signature.scanner.paths={','.join(config.scan_paths)}")

    if config.dependency_path:
        result.append(f"--detect.source.path={config.dependency_path}")
    else:
        result.append("--detect.source.path='.'")

    if config.included_package_managers:
        included = ",".join(name.upper() for name in config.included_package_managers)
        result.append(f"--detect.included.detector.types={included}")

    if config.excluded_package_managers:
        excluded = ",".join(name.upper() for name in config.excluded_package_managers)
        result.append(f"--detect.excluded.detector.types={excluded}")

    if config.maven_excluded_scopes:
        scopes = ",".join(scope.lower() for scope in config.maven_excluded_scopes)
        result.append(f"--detect.maven.excluded.scopes={scopes}")

    if config.detect_tools:
        result.append(f"--detect.tools={','.join(config.detect_tools)}")

    maven_flag = maven_build_command(config, working_dir=working_dir)
    if maven_flag:
        result.append(maven_flag)

    return result


__all__ = [
    "REPORT_FLAG",
    "UNMAP_FALSE",
    "UNMAP_PREFIX",
    "UNMAP_TRUE",
    "apply_versioning_model",
    "build_detect_args",
    "maven_build_command",
]
