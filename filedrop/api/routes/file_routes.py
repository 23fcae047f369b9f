# filedrop/api/routes/file_routes.py

from __future__ import annotations

from flask import Blueprint, jsonify, render_template, send_file, url_for

from filedrop.api.routes._deps import get_settings, get_storage
from filedrop.api.schemas.file_schema import FileListItem, FileListResponse
from filedrop.core.exceptions import NotFoundError
from filedrop.services.listing_service import ListingService

bp_files = Blueprint("files", __name__)


def _list_items() -> list[FileListItem]:
    entries = ListingService(storage=get_storage()).list_files()
    return [
        FileListItem(
            name=e.name,
            size_bytes=e.size_bytes,
            size_kb=e.size_kb,
            modified_at=e.modified_at,
            download_url=url_for("files.download_file", name=e.name),
        )
        for e in entries
    ]


# -------------------------
# Listing
# -------------------------

@bp_files.get("/files")
def list_files():
    return render_template("files.html", files=_list_items()), 200


@bp_files.get("/api/files")
def list_files_json():
    return jsonify(FileListResponse(files=_list_items()).model_dump(mode="json")), 200


# -------------------------
# Download (read-only, no index, no dot-files)
# -------------------------

@bp_files.get("/uploads/")
def uploads_index():
    raise NotFoundError()


@bp_files.get("/uploads/<path:name>")
def download_file(name: str):
    if any(part.startswith(".") for part in name.split("/")):
        raise NotFoundError()

    abs_path = get_storage().path_for(name)
    if not abs_path.is_file():
        raise NotFoundError()

    return send_file(
        abs_path,
        max_age=get_settings().download_max_age,
        conditional=True,
        etag=True,
        last_modified=True,
    )
