# filedrop/infrastructure/storage/local_file_storage.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO

from filedrop.core.exceptions import (
    FileTooLargeError,
    NameCollisionError,
    NotFoundError,
    StorageError,
)
from filedrop.core.logging_config import get_logger
from filedrop.infrastructure.storage.file_storage import FileStorage, StoredFile

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1MB


@dataclass(frozen=True)
class LocalFileStorageConfig:
    base_path: str | os.PathLike


class LocalFileStorage(FileStorage):
    def __init__(self, *, config: LocalFileStorageConfig) -> None:
        raw = str(config.base_path or "").strip()
        if not raw:
            raise StorageError("Upload directory is not configured (UPLOAD_DIR is empty).")

        self._base = Path(raw).expanduser().resolve()

        try:
            self._base.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            raise StorageError(
                f"No permission to create the upload directory '{self._base}'. "
                "Check the service user's permissions or change UPLOAD_DIR."
            )
        except OSError as e:
            raise StorageError(f"Could not initialise the upload directory '{self._base}': {e}")

        if not self._base.is_dir():
            raise StorageError(f"Invalid upload directory: '{self._base}' is not a directory.")

        if not os.access(self._base, os.W_OK):
            raise StorageError(f"Upload directory '{self._base}' is not writable.")

    @property
    def base_path(self) -> Path:
        return self._base

    def _abs_path_from_stored(self, stored_name: str) -> Path:
        # flat layout: a stored name is a single path component
        if not stored_name or stored_name in (".", "..") or Path(stored_name).name != stored_name:
            raise NotFoundError()

        abs_path = (self._base / stored_name).resolve()
        if abs_path.parent != self._base:
            raise NotFoundError()
        return abs_path

    def path_for(self, stored_name: str) -> Path:
        return self._abs_path_from_stored(stored_name)

    def _discard(self, abs_path: Path) -> None:
        try:
            abs_path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Could not remove partial file {abs_path}: {e}")

    def save(
        self,
        *,
        fileobj: BinaryIO,
        stored_name: str,
        max_bytes: int,
        original_name: str | None = None,
    ) -> StoredFile:
        try:
            abs_path = self._abs_path_from_stored(stored_name)
        except NotFoundError:
            raise StorageError(f"Invalid stored name: '{stored_name}'.")

        try:
            out = open(abs_path, "xb")
        except FileExistsError:
            raise NameCollisionError(stored_name)
        except OSError as e:
            raise StorageError(f"Could not create '{stored_name}': {e}")

        size = 0
        try:
            with out:
                while True:
                    chunk = fileobj.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > max_bytes:
                        raise FileTooLargeError(max_bytes)
                    out.write(chunk)
        except OSError as e:
            self._discard(abs_path)
            raise StorageError(f"Failed to write '{stored_name}': {e}")
        except Exception:
            self._discard(abs_path)
            raise

        return StoredFile(
            stored_name=stored_name,
            size_bytes=size,
            modified_at=datetime.now(timezone.utc),
            original_name=original_name,
        )

    def list_files(self) -> list[StoredFile]:
        try:
            entries = list(os.scandir(self._base))
        except OSError as e:
            raise StorageError(f"Could not read the upload directory: {e}")

        out: list[StoredFile] = []
        for entry in entries:
            try:
                if not entry.is_file(follow_symlinks=False):
                    continue
                st = entry.stat(follow_symlinks=False)
            except FileNotFoundError:
                # removed between scandir and stat
                continue
            except OSError as e:
                raise StorageError(f"Could not stat '{entry.name}': {e}")

            out.append(
                StoredFile(
                    stored_name=entry.name,
                    size_bytes=st.st_size,
                    modified_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
                )
            )

        out.sort(key=lambda f: f.stored_name)
        return out
