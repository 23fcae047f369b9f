"""Tests for the HTTP surface through Flask's test client."""

import io
import shutil

import pytest

from filedrop.core.exceptions import StorageError
from filedrop.infrastructure.storage.local_file_storage import LocalFileStorage
from filedrop.services import upload_service


def _upload(client, name, data=b"content", field="myfile"):
    return client.post(
        "/upload",
        data={field: (io.BytesIO(data), name)},
        content_type="multipart/form-data",
    )


def test_index_serves_upload_form(client):
    response = client.get("/")
    assert response.status_code == 200
    assert b'name="myfile"' in response.data
    assert b'action="/upload"' in response.data


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_upload_directory_created_on_startup(app, upload_dir):
    assert upload_dir.is_dir()


def test_upload_round_trip(client, upload_dir, stored_names):
    data = bytes(range(256)) * 1000
    response = _upload(client, "photo.png", data)

    assert response.status_code == 200
    names = stored_names()
    assert len(names) == 1
    assert names[0].startswith("photo-") and names[0].endswith(".png")
    assert names[0].encode() in response.data
    assert (upload_dir / names[0]).read_bytes() == data

    download = client.get(f"/uploads/{names[0]}")
    assert download.status_code == 200
    assert download.data == data


def test_upload_confirmation_links_back(client):
    response = _upload(client, "notes.txt")
    assert b'href="/"' in response.data
    assert b'href="/files"' in response.data


def test_upload_without_file_part(client, stored_names):
    response = client.post("/upload", data={}, content_type="multipart/form-data")

    assert response.status_code == 400
    assert b"No file selected." in response.data
    assert b'href="/"' in response.data
    assert stored_names() == []


def test_upload_with_empty_file_input(client):
    response = _upload(client, "", b"")
    assert response.status_code == 400
    assert b"No file selected." in response.data


def test_upload_disallowed_extension(client, stored_names):
    response = _upload(client, "setup.exe", b"MZ\x90\x00")

    assert response.status_code == 400
    assert b"extension not permitted" in response.data
    assert stored_names() == []


def test_upload_too_large(client, stored_names):
    response = _upload(client, "big.zip", b"\0" * (11 * 1024 * 1024))

    assert response.status_code == 400
    assert b"File too large" in response.data
    assert b"10 MB" in response.data
    assert stored_names() == []


def test_upload_exactly_at_limit(client, stored_names):
    response = _upload(client, "max.zip", b"\0" * (10 * 1024 * 1024))
    assert response.status_code == 200
    assert len(stored_names()) == 1


def test_upload_unexpected_field(client, stored_names):
    response = _upload(client, "a.txt", field="other")

    assert response.status_code == 400
    assert b"Unexpected file field" in response.data
    assert stored_names() == []


def test_upload_more_than_one_file(client, stored_names):
    response = client.post(
        "/upload",
        data={"myfile": [(io.BytesIO(b"1"), "a.txt"), (io.BytesIO(b"2"), "b.txt")]},
        content_type="multipart/form-data",
    )

    assert response.status_code == 400
    assert stored_names() == []


def test_upload_path_traversal_stays_in_directory(client, upload_dir, stored_names):
    response = _upload(client, "../../etc/passwd.txt", b"root:x:0:0")

    assert response.status_code == 200
    names = stored_names()
    assert len(names) == 1
    assert "/" not in names[0] and "\\" not in names[0]
    assert (upload_dir / names[0]).read_bytes() == b"root:x:0:0"
    assert sorted(p.name for p in upload_dir.parent.iterdir()) == ["uploads"]


def test_same_name_uploads_both_retrievable(client, stored_names):
    first = _upload(client, "dup.txt", b"first")
    second = _upload(client, "dup.txt", b"second")

    assert first.status_code == 200
    assert second.status_code == 200
    names = stored_names()
    assert len(names) == 2
    bodies = {client.get(f"/uploads/{n}").data for n in names}
    assert bodies == {b"first", b"second"}


def test_upload_same_millisecond(client, stored_names, monkeypatch):
    monkeypatch.setattr(upload_service, "timestamp_token", lambda: 1700000000000)

    _upload(client, "dup.txt", b"first")
    _upload(client, "dup.txt", b"second")

    assert stored_names() == ["dup-1700000000000.txt", "dup-1700000000001.txt"]


def test_upload_write_failure_is_server_error(client, monkeypatch):
    def _broken_save(self, **kwargs):
        raise StorageError("disk full")

    monkeypatch.setattr(LocalFileStorage, "save", _broken_save)

    response = _upload(client, "a.txt")
    assert response.status_code == 500
    assert b"disk full" in response.data


def test_files_empty(client):
    response = client.get("/files")
    assert response.status_code == 200
    assert b"No files." in response.data


def test_files_after_one_upload(client, stored_names):
    _upload(client, "data.txt", b"x" * 2560)

    response = client.get("/files")
    name = stored_names()[0]

    assert response.status_code == 200
    assert response.data.count(b"<li>") == 1
    assert f'href="/uploads/{name}"'.encode() in response.data
    assert b"3 KB" in response.data
    assert b"No files." not in response.data


def test_files_escapes_names(client, upload_dir):
    (upload_dir / "a&b.txt").write_bytes(b"x")
    response = client.get("/files")
    assert b"a&amp;b.txt" in response.data


def test_files_directory_unreadable(client, upload_dir):
    shutil.rmtree(upload_dir)

    response = client.get("/files")
    assert response.status_code == 500
    assert b"Error:" in response.data


def test_files_json(client, stored_names):
    _upload(client, "data.txt", b"x" * 1536)

    response = client.get("/api/files")
    files = response.get_json()["files"]

    assert response.status_code == 200
    assert len(files) == 1
    assert files[0]["name"] == stored_names()[0]
    assert files[0]["size_bytes"] == 1536
    assert files[0]["size_kb"] == 2
    assert files[0]["download_url"] == f"/uploads/{stored_names()[0]}"


def test_download_sets_cache_control(client, upload_dir):
    (upload_dir / "cached-1.txt").write_bytes(b"cached")

    response = client.get("/uploads/cached-1.txt")

    assert response.status_code == 200
    assert "max-age=3600" in response.headers["Cache-Control"]


def test_download_missing_file(client):
    assert client.get("/uploads/nope-1.txt").status_code == 404


@pytest.mark.parametrize("path", ["/uploads/.env", "/uploads/.hidden/file.txt"])
def test_download_denies_dot_files(client, upload_dir, path):
    (upload_dir / ".env").write_text("SECRET=1")
    (upload_dir / ".hidden").mkdir()
    (upload_dir / ".hidden" / "file.txt").write_text("x")

    response = client.get(path)
    assert response.status_code == 404
    assert b"SECRET" not in response.data


def test_download_has_no_directory_index(client, upload_dir):
    (upload_dir / "a.txt").write_bytes(b"a")
    (upload_dir / "folder").mkdir()

    assert client.get("/uploads/").status_code == 404
    assert client.get("/uploads/folder").status_code == 404


def test_download_rejects_nested_paths(client, upload_dir):
    (upload_dir / "sub").mkdir()
    (upload_dir / "sub" / "x.txt").write_bytes(b"x")

    assert client.get("/uploads/sub/x.txt").status_code == 404


def test_responses_carry_request_id(client):
    response = client.get("/files")
    assert response.headers.get("X-Request-ID")


def test_unknown_route_renders_error_page(client):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert b"Error:" in response.data
