# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for detectscan."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"detectscan/{__version__}"
DEFAULT_SCRIPT_URL = "https://detect.synopsys.com/detect.sh"
DEFAULT_SCRIPT_NAME = "detect.sh"
DEFAULT_SHELL = "/bin/bash"
DEFAULT_IP_REPORT = "blackduck-ip.json"
DEFAULT_POLICY_REPORT = "blackduck-policy.json"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 60.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_body_bytes: int = 64 * 1024 * 1024

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("DETECTSCAN_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=_float_env("DETECTSCAN_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("DETECTSCAN_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("DETECTSCAN_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("DETECTSCAN_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
        )


@dataclass
class DetectSettings:
    """Where the Detect script comes from and how it is executed."""

    script_url: str = DEFAULT_SCRIPT_URL
    script_name: str = DEFAULT_SCRIPT_NAME
    shell: str = DEFAULT_SHELL
    working_dir: str = "."
    skip_phone_home: bool = True
    ip_report: str = DEFAULT_IP_REPORT
    policy_report: str = DEFAULT_POLICY_REPORT

    @classmethod
    def from_env(cls) -> "DetectSettings":
        return cls(
            script_url=_str_env("DETECTSCAN_SCRIPT_URL", cls.script_url),
            script_name=_str_env("DETECTSCAN_SCRIPT_NAME", cls.script_name),
            shell=_str_env("DETECTSCAN_SHELL", cls.shell),
            working_dir=_str_env("DETECTSCAN_WORKDIR", cls.working_dir),
            skip_phone_home=_bool_env("DETECTSCAN_SKIP_PHONE_HOME", cls.skip_phone_home),
            ip_report=_str_env("DETECTSCAN_IP_REPORT", cls.ip_report),
            policy_report=_str_env("DETECTSCAN_POLICY_REPORT", cls.policy_report),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_detect_settings() -> DetectSettings:
    """Load Detect execution settings from environment."""
    return DetectSettings.from_env()
