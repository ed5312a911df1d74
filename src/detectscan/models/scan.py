# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scan configuration model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

_LIST_FIELDS = {
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
}
_BOOL_FIELDS = {"unmap", "scan_on_changes"}

# Step parameter names as they appear in pipeline configuration files.
_ALIASES = {
    "serverUrl": "server_url",
    "apiToken": "token",
    "projectName": "project_name",
    "versioningModel": "versioning_model",
    "codeLocation": "code_location",
    "dependencyPath": "dependency_path",
    "scanOnChanges": "scan_on_changes",
    "scanProperties": "scan_properties",
    "failOn": "fail_on",
    "scanPaths": "scan_paths",
    "includedPackageManagers": "included_package_managers",
    "excludedPackageManagers": "excluded_package_managers",
    "mavenExcludedScopes": "maven_excluded_scopes",
    "detectTools": "detect_tools",
    "m2Path": "m2_path",
    "projectSettingsFile": "project_settings_file",
    "globalSettingsFile": "global_settings_file",
    "customEnvironmentVariables": "custom_environment_variables",
}


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item) for item in value if item is not None and str(item) != ""]


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass
class ScanConfig:
    """
    Options of a single Detect scan.

    Every field is optional; unset scalars are empty strings and unset lists are
    empty, and neither emits a flag unless the flag is always present.
    """

    server_url: str = ""
    token: str = ""
    project_name: str = ""
    version: str = ""
    versioning_model: str = ""
    code_location: str = ""
    dependency_path: str = ""
    unmap: bool = False
    scan_on_changes: bool = False
    m2_path: str = ""
    project_settings_file: str = ""
    global_settings_file: str = ""
    scan_properties: list[str] = field(default_factory=list)
    fail_on: list[str] = field(default_factory=list)
    scanners: list[str] = field(default_factory=list)
    scan_paths: list[str] = field(default_factory=list)
    groups: list[str] = field(default_factory=list)
    included_package_managers: list[str] = field(default_factory=list)
    excluded_package_managers: list[str] = field(default_factory=list)
    maven_excluded_scopes: list[str] = field(default_factory=list)
    detect_tools: list[str] = field(default_factory=list)
    custom_environment_variables: list[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ScanConfig:
        """Build a config from a mapping using snake_case or step parameter names."""
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known or value is None:
                continue
            if name in _LIST_FIELDS:
                values[name] = _as_list(value)
            elif name in _BOOL_FIELDS:
                values[name] = _as_bool(value)
            else:
                values[name] = str(value)
        return cls(**values)

    def to_dict(self, *, redact: bool = True) -> dict[str, Any]:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        if redact and out["token"]:
            out["token"] = "****"
        return out
