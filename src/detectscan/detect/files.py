# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""File-system seam used by the scan step."""

from __future__ import annotations

import fnmatch
import glob
import os
import posixpath
from typing import Protocol


class FileSystem(Protocol):
    """The handful of file operations the scan step needs."""

    def exists(self, path: str) -> bool: ...

    def read_file(self, path: str) -> bytes: ...

    def write_file(self, path: str, data: bytes, mode: int = 0o644) -> None: ...

    def remove(self, path: str) -> None: ...

    def chmod(self, path: str, mode: int) -> None: ...

    def glob(self, pattern: str) -> list[str]: ...

    def getcwd(self) -> str: ...


class LocalFileSystem(FileSystem):
    """FileSystem backed by the real disk."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def read_file(self, path: str) -> bytes:
        with open(path, "rb") as handle:
            return handle.read()

    def write_file(self, path: str, data: bytes, mode: int = 0o644) -> None:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "wb") as handle:
            handle.write(data)
        os.chmod(path, mode)

    def remove(self, path: str) -> None:
        os.remove(path)

    def chmod(self, path: str, mode: int) -> None:
        os.chmod(path, mode)

    def glob(self, pattern: str) -> list[str]:
        return sorted(glob.glob(pattern))

    def getcwd(self) -> str:
        return os.getcwd()


class MemoryFileSystem(FileSystem):
    """Dict-backed FileSystem for tests; remembers removed paths and modes."""

    def __init__(self, files: dict[str, bytes] | None = None, current_dir: str = "/"):
        self.files: dict[str, bytes] = dict(files or {})
        self.modes: dict[str, int] = {}
        self.removed: list[str] = []
        self.current_dir = current_dir

    def add_file(self, path: str, data: bytes | str = b"") -> None:
        self.files[path] = data.encode("utf-8") if isinstance(data, str) else data

    def has_removed_file(self, path: str) -> bool:
        return path in self.removed

    def exists(self, path: str) -> bool:
        return path in self.files

    def read_file(self, path: str) -> bytes:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    def write_file(self, path: str, data: bytes, mode: int = 0o644) -> None:
        self.files[path] = data
        self.modes[path] = mode

    def remove(self, path: str) -> None:
        if path not in self.files:
            raise FileNotFoundError(path)
        del self.files[path]
        self.removed.append(path)

    def chmod(self, path: str, mode: int) -> None:
        if path not in self.files:
            raise FileNotFoundError(path)
        self.modes[path] = mode

    def glob(self, pattern: str) -> list[str]:
        return sorted(path for path in self.files if fnmatch.fnmatchcase(path, pattern))

    def getcwd(self) -> str:
        return posixpath.join("/", self.current_dir)
