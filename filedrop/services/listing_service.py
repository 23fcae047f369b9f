# filedrop/services/listing_service.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from filedrop.infrastructure.storage.file_storage import FileStorage


def size_in_kb(size_bytes: int) -> int:
    """Kibibytes rounded half-up: 511 -> 0, 512 -> 1, 1536 -> 2, 2560 -> 3."""
    return (size_bytes + 512) // 1024


@dataclass(frozen=True)
class FileEntry:
    name: str
    size_bytes: int
    modified_at: datetime

    @property
    def size_kb(self) -> int:
        return size_in_kb(self.size_bytes)


class ListingService:
    def __init__(self, *, storage: FileStorage) -> None:
        self._storage = storage

    def list_files(self) -> list[FileEntry]:
        return [
            FileEntry(name=f.stored_name, size_bytes=f.size_bytes, modified_at=f.modified_at)
            for f in self._storage.list_files()
        ]
