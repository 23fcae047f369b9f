# filedrop/core/naming.py
from __future__ import annotations

import re
import time

MAX_NAME_BYTES = 255
PLACEHOLDER_NAME = "file"

_ILLEGAL_RE = re.compile(r'[/?<>\\:*|"]')
_CONTROL_RE = re.compile(r"[\x00-\x1f\x80-\x9f]")
_RESERVED_RE = re.compile(r"^\.+$")
_WINDOWS_RESERVED_RE = re.compile(r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE)
_WINDOWS_TRAILING_RE = re.compile(r"[. ]+$")


def _truncate_utf8(value: str, max_bytes: int) -> str:
    encoded = value.encode("utf-8")
    if len(encoded) <= max_bytes:
        return value
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def _fit(name: str, max_bytes: int) -> str:
    """Shorten to max_bytes, cutting the base rather than the extension."""
    if len(name.encode("utf-8")) <= max_bytes:
        return name
    base, ext = split_name(name)
    room = max_bytes - len(ext.encode("utf-8"))
    if room < 1:
        return _truncate_utf8(name, max_bytes)
    return _truncate_utf8(base, room) + ext


def sanitize_filename(filename: str | None) -> str:
    """
    Make an untrusted client filename safe to use inside the upload directory.

    Separators, reserved characters and control characters are removed, names
    made only of dots or matching a Windows device name are dropped, and
    leading dots are stripped so a stored file is never hidden. Falls back to
    PLACEHOLDER_NAME when nothing usable is left.
    """
    name = filename or ""
    name = _ILLEGAL_RE.sub("", name)
    name = _CONTROL_RE.sub("", name)
    name = _RESERVED_RE.sub("", name)
    name = _WINDOWS_RESERVED_RE.sub("", name)
    name = _WINDOWS_TRAILING_RE.sub("", name)
    name = name.lstrip(". ")
    name = _fit(name, MAX_NAME_BYTES)
    # truncation can expose a trailing dot again
    name = _WINDOWS_TRAILING_RE.sub("", name)
    if not name:
        return PLACEHOLDER_NAME
    return name


def split_name(name: str) -> tuple[str, str]:
    """Split at the last dot; the extension keeps its dot or is ''."""
    idx = name.rfind(".")
    if idx <= 0:
        return name, ""
    return name[:idx], name[idx:]


def extension_of(filename: str | None) -> str:
    return split_name(sanitize_filename(filename))[1].lower()


def timestamp_token() -> int:
    return time.time_ns() // 1_000_000


def build_stored_name(original_name: str | None, token: int | None = None) -> str:
    if token is None:
        token = timestamp_token()

    base, ext = split_name(sanitize_filename(original_name))
    suffix = f"-{token}{ext}"

    room = MAX_NAME_BYTES - len(suffix.encode("utf-8"))
    base = _truncate_utf8(base, max(room, 1)) or PLACEHOLDER_NAME
    return f"{base}{suffix}"
