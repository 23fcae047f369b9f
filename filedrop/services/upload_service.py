# filedrop/services/upload_service.py
from __future__ import annotations

import io
import os
from dataclasses import dataclass
from typing import BinaryIO, Callable

from filedrop.core.exceptions import (
    AppError,
    ExtensionNotAllowedError,
    FileTooLargeError,
    NameCollisionError,
    NoFileSelectedError,
)
from filedrop.core.logging_config import get_logger
from filedrop.core.naming import build_stored_name, extension_of, timestamp_token
from filedrop.infrastructure.storage.file_storage import FileStorage, StoredFile

logger = get_logger(__name__)

MAX_NAME_ATTEMPTS = 5


@dataclass(frozen=True)
class IncomingFile:
    filename: str | None
    stream: BinaryIO


@dataclass(frozen=True)
class CheckResult:
    error: AppError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


PASSED = CheckResult()

Check = Callable[[IncomingFile | None], CheckResult]


def _stream_size(stream: BinaryIO) -> int | None:
    """Bytes left in a seekable stream, None when it cannot be measured up front."""
    try:
        pos = stream.tell()
        end = stream.seek(0, os.SEEK_END)
        stream.seek(pos)
    except (AttributeError, OSError, io.UnsupportedOperation):
        return None
    return end - pos


class UploadService:
    def __init__(
        self,
        *,
        storage: FileStorage,
        allowed_extensions: frozenset[str],
        max_bytes: int,
    ) -> None:
        self._storage = storage
        self._allowed = allowed_extensions
        self._max_bytes = max_bytes

    # -------------------------
    # Checks (run in order, first failure wins)
    # -------------------------

    def _require_file(self, incoming: IncomingFile | None) -> CheckResult:
        if incoming is None or not (incoming.filename or "").strip():
            return CheckResult(NoFileSelectedError())
        return PASSED

    def _check_extension(self, incoming: IncomingFile) -> CheckResult:
        ext = extension_of(incoming.filename)
        if ext not in self._allowed:
            return CheckResult(ExtensionNotAllowedError(ext))
        return PASSED

    def _check_size(self, incoming: IncomingFile) -> CheckResult:
        size = _stream_size(incoming.stream)
        if size is not None and size > self._max_bytes:
            return CheckResult(FileTooLargeError(self._max_bytes))
        return PASSED

    @property
    def checks(self) -> tuple[Check, ...]:
        return (self._require_file, self._check_extension, self._check_size)

    # -------------------------
    # Upload
    # -------------------------

    def _write(self, incoming: IncomingFile) -> StoredFile:
        token = timestamp_token()
        last_error: NameCollisionError | None = None

        for attempt in range(MAX_NAME_ATTEMPTS):
            stored_name = build_stored_name(incoming.filename, token + attempt)
            try:
                return self._storage.save(
                    fileobj=incoming.stream,
                    stored_name=stored_name,
                    max_bytes=self._max_bytes,
                    original_name=incoming.filename,
                )
            except NameCollisionError as e:
                logger.info(f"Stored name {stored_name} taken, retrying with next token")
                last_error = e

        raise last_error

    def upload(self, incoming: IncomingFile | None) -> StoredFile:
        for check in self.checks:
            result = check(incoming)
            if not result.ok:
                logger.warning(
                    f"Upload rejected: {result.error} "
                    f"[filename={incoming.filename if incoming else None!r}]"
                )
                raise result.error

        try:
            stored = self._write(incoming)
        except FileTooLargeError:
            logger.warning(f"Upload rejected while writing: size over {self._max_bytes} bytes")
            raise

        logger.info(
            f"Stored upload {incoming.filename!r} as {stored.stored_name} ({stored.size_bytes} bytes)"
        )
        return stored
