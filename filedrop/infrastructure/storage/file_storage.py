# filedrop/infrastructure/storage/file_storage.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Protocol


@dataclass(frozen=True)
class StoredFile:
    stored_name: str
    size_bytes: int
    modified_at: datetime
    original_name: str | None = None


class FileStorage(Protocol):
    def save(
        self,
        *,
        fileobj: BinaryIO,
        stored_name: str,
        max_bytes: int,
        original_name: str | None = None,
    ) -> StoredFile:
        """Persist a stream under stored_name. Never leaves a partial file behind."""
        raise NotImplementedError

    def list_files(self) -> list[StoredFile]:
        """Regular files currently in storage, sorted by name."""
        raise NotImplementedError

    def path_for(self, stored_name: str) -> Path:
        """Absolute path of a stored file inside the storage root."""
        raise NotImplementedError
