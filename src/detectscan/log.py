# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for detectscan."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("DETECTSCAN_LOG_LEVEL", "WARNING").upper()
_SECRET_FLAGS = ("--blackduck.api.token=",)


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI/library use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def mask_secrets(args: list[str]) -> list[str]:
    """Return a copy of a Detect argument list with credential values replaced."""
    masked: list[str] = []
    for arg in args:
        for prefix in _SECRET_FLAGS:
            if arg.startswith(prefix) and len(arg) > len(prefix):
                arg = prefix + "****"
                break
        masked.append(arg)
    return masked


__all__ = ["mask_secrets", "setup_logging"]
