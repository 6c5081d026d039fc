from __future__ import annotations

import logging
import os
import shutil
import tempfile
import threading
import uuid
from pathlib import Path

from .errors import ProjectBuildError

logger = logging.getLogger(__name__)

INTEGRATION_TEST_DIR = "handlertest-integration-tests"

# Fixture directories may be built from several threads of one test process.
_file_op_lock = threading.Lock()


class FileBuilder:
    def __init__(self, path: Path, body: bytes | str) -> None:
        self.path = path
        self.body = body.encode("utf-8") if isinstance(body, str) else bytes(body)

    def mk(self) -> None:
        _mkdir_recursive(self.path.parent)
        try:
            with open(self.path, "wb") as f:
                f.write(self.body)
        except OSError as exc:
            raise ProjectBuildError(
                f"Could not create file; path={self.path}; original={exc!r}"
            ) from exc

    def __repr__(self) -> str:
        return f"<FileBuilder {self.path} {len(self.body)} bytes>"


class ProjectBuilder:
    """
    Temporary directory of fixture files, removed again on cleanup.

    Files are queued with ``file()`` and written by ``build()``. Use it as a
    context manager, or call ``cleanup()`` yourself::

        with ProjectBuilder("uploads").file("a.txt", "hello").build() as project:
            body.upload("doc", project.root / "a.txt")

    Args:
        name: Directory name of the project inside its unique test directory
        base_dir: Where test directories are created
            (default: <tempdir>/handlertest-integration-tests)
    """

    def __init__(self, name: str, base_dir: str | os.PathLike[str] | None = None) -> None:
        base = Path(base_dir) if base_dir is not None else _integration_tests_dir()
        test_dir = base / f"test-{uuid.uuid4()}"
        _rm_rf(test_dir)
        self.name = name
        self._root = test_dir / name
        self.files: list[FileBuilder] = []

    @property
    def root(self) -> Path:
        return self._root

    def file(self, path: str | os.PathLike[str], body: bytes | str) -> ProjectBuilder:
        relative = Path(path)
        # Files must stay under root so cleanup() removes them.
        if relative.is_absolute() or ".." in relative.parts:
            raise ProjectBuildError(f"File path escapes the project root; path={path}")
        self.files.append(FileBuilder(self._root / relative, body))
        return self

    def build(self) -> ProjectBuilder:
        _mkdir_recursive(self._root)
        for file in self.files:
            file.mk()
        return self

    def cleanup(self) -> None:
        test_dir = self._root.parent
        try:
            _rm_rf(test_dir)
        except OSError as exc:
            logger.debug("Failed to cleanup the test directory; path=%s; %s", test_dir, exc)
        else:
            logger.debug("Successfully cleaned up the test directory; path=%s", test_dir)

    def __enter__(self) -> ProjectBuilder:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def __repr__(self) -> str:
        return f"<ProjectBuilder {self.name} root={self._root} files={len(self.files)}>"


def _integration_tests_dir() -> Path:
    return Path(tempfile.gettempdir()) / INTEGRATION_TEST_DIR


def _mkdir_recursive(path: Path) -> None:
    with _file_op_lock:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ProjectBuildError(
                f"could not create directory; path={path}; original={exc!r}"
            ) from exc


def _rm_rf(path: Path) -> None:
    with _file_op_lock:
        if path.exists():
            shutil.rmtree(path)
