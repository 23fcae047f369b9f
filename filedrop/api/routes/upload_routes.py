# filedrop/api/routes/upload_routes.py

from __future__ import annotations

from flask import Blueprint, current_app, render_template, request, url_for

from filedrop.api.routes._deps import get_settings, get_storage
from filedrop.api.schemas.file_schema import UploadFileResponse
from filedrop.core.exceptions import UnexpectedFieldError
from filedrop.services.upload_service import IncomingFile, UploadService

bp_upload = Blueprint("upload", __name__)


# -------------------------
# Helpers
# -------------------------

def _build_service() -> UploadService:
    settings = get_settings()
    return UploadService(
        storage=get_storage(),
        allowed_extensions=settings.allowed_extensions,
        max_bytes=settings.max_file_size_bytes,
    )


def _get_upload_file() -> IncomingFile | None:
    """Single file under the configured field; anything else is a client error."""
    field = get_settings().upload_field

    unexpected = [name for name in request.files.keys() if name != field]
    if unexpected:
        raise UnexpectedFieldError(f"Unexpected file field: '{unexpected[0]}'.")

    files = request.files.getlist(field)
    if len(files) > 1:
        raise UnexpectedFieldError("Only one file can be uploaded per request.")
    if not files:
        return None

    f = files[0]
    return IncomingFile(filename=f.filename, stream=f.stream)


# -------------------------
# Routes
# -------------------------

@bp_upload.get("/")
def index():
    return current_app.send_static_file("index.html")


@bp_upload.post("/upload")
def upload_file():
    incoming = _get_upload_file()
    stored = _build_service().upload(incoming)

    payload = UploadFileResponse(
        original_name=stored.original_name,
        stored_name=stored.stored_name,
        size_bytes=stored.size_bytes,
        download_url=url_for("files.download_file", name=stored.stored_name),
    )
    return render_template("uploaded.html", file=payload), 200
