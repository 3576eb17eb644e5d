"""Admin document dashboard tests."""
from __future__ import annotations

import asyncio

import httpx
import pytest

from conftest import FakeBackend
from vta_frontend.documents.constants import LIST_UNAUTHORIZED_MESSAGE, PDF_ONLY_MESSAGE, UPLOAD_SUCCESS_MESSAGE
from vta_frontend.documents.exceptions import UnsupportedFileTypeError
from vta_frontend.documents.registry import is_pdf

PDF_BYTES = b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n"


@pytest.fixture
def admin(make_admin_workspace):
    return make_admin_workspace({"adminToken": "admin-tok"})


def test_listing_sends_admin_token(admin, backend: FakeBackend) -> None:
    backend.json("GET", "/documents/list", {"manuals": [{"file_name": "a.pdf"}, {"file_name": "b.pdf"}]})

    manuals = asyncio.run(admin.dashboard.refresh())

    assert [manual.file_name for manual in manuals] == ["a.pdf", "b.pdf"]
    assert backend.calls("/documents/list")[0].headers["Authorization"] == "Bearer admin-tok"
    assert not admin.dashboard.can_retry


def test_non_list_manuals_are_treated_as_empty(admin, backend: FakeBackend) -> None:
    backend.json("GET", "/documents/list", {"manuals": "oops"})

    assert asyncio.run(admin.dashboard.refresh()) == []
    assert admin.dashboard.error is None


@pytest.mark.parametrize("status_code", [401, 403])
def test_unauthorized_listing_has_its_own_message(admin, backend: FakeBackend, status_code: int) -> None:
    backend.json("GET", "/documents/list", {"detail": "Not authenticated"}, status_code=status_code)

    assert asyncio.run(admin.dashboard.refresh()) == []

    assert admin.dashboard.error == LIST_UNAUTHORIZED_MESSAGE
    assert admin.dashboard.can_retry
    assert admin.notifications.drain()[-1].description == LIST_UNAUTHORIZED_MESSAGE


def test_server_error_listing_is_retryable(admin, backend: FakeBackend) -> None:
    backend.json("GET", "/documents/list", {"detail": "db down"}, status_code=500)

    asyncio.run(admin.dashboard.refresh())

    assert admin.dashboard.error == "Failed to fetch files"
    assert admin.dashboard.can_retry
    assert admin.notifications.drain()[-1].description == "Failed to fetch files. Please try again."

    backend.json("GET", "/documents/list", {"manuals": [{"file_name": "a.pdf"}]})
    assert len(asyncio.run(admin.dashboard.refresh())) == 1
    assert not admin.dashboard.can_retry


@pytest.mark.parametrize(
    ("filename", "content_type"),
    [("notes.txt", "text/plain"), ("scan.png", None), ("manual.pdf", "image/png")],
)
def test_non_pdf_is_rejected_without_request(admin, backend: FakeBackend, filename, content_type) -> None:
    result = asyncio.run(admin.dashboard.upload(filename, b"data", content_type))

    assert result is None
    assert backend.requests == []
    assert admin.notifications.drain()[-1].description == PDF_ONLY_MESSAGE


def test_registry_raises_for_non_pdf(admin) -> None:
    with pytest.raises(UnsupportedFileTypeError):
        asyncio.run(admin.dashboard.registry.upload("notes.txt", b"data", "text/plain"))


def test_upload_appends_manual(admin, backend: FakeBackend) -> None:
    backend.json("GET", "/documents/list", {"manuals": [{"file_name": "a.pdf"}]})
    backend.json("POST", "/documents/upload", {"file_name": "guide.pdf", "message": "ok"})
    asyncio.run(admin.dashboard.refresh())

    manual = asyncio.run(admin.dashboard.upload("/tmp/gradio/guide.pdf", PDF_BYTES, "application/pdf"))

    assert manual is not None and manual.file_name == "guide.pdf"
    assert [m.file_name for m in admin.dashboard.registry.manuals] == ["a.pdf", "guide.pdf"]
    request = backend.calls("/documents/upload")[0]
    assert request.headers["Authorization"] == "Bearer admin-tok"
    assert b'name="file"; filename="guide.pdf"' in request.content
    assert admin.notifications.drain()[-1].description == UPLOAD_SUCCESS_MESSAGE


def test_upload_surfaces_backend_detail(admin, backend: FakeBackend) -> None:
    backend.json("POST", "/documents/upload", {"detail": "File already indexed"}, status_code=409)

    assert asyncio.run(admin.dashboard.upload("guide.pdf", PDF_BYTES)) is None

    assert admin.notifications.drain()[-1].description == "File already indexed"
    assert admin.dashboard.registry.manuals == []


def test_upload_without_detail_uses_default(admin, backend: FakeBackend) -> None:
    backend.route("POST", "/documents/upload", lambda request: httpx.Response(500, text="boom"))

    asyncio.run(admin.dashboard.upload("guide.pdf", PDF_BYTES))

    assert admin.notifications.drain()[-1].description == "Upload failed"


def test_admin_login_then_logout(make_admin_workspace, backend: FakeBackend) -> None:
    backend.json("POST", "/auth/admin/token", {"access_token": "admin-tok"})
    backend.json("GET", "/documents/list", {"manuals": [{"file_name": "a.pdf"}]})
    storage: dict[str, str] = {}
    admin = make_admin_workspace(storage)

    assert asyncio.run(admin.dashboard.login("admin@example.com", "secret")) is True
    assert [n.title for n in admin.notifications.drain()] == ["Login Successful"]
    assert len(admin.dashboard.registry.manuals) == 1

    admin.dashboard.logout()

    assert storage == {}
    assert admin.dashboard.registry.manuals == []


def test_admin_login_failure_shows_detail(make_admin_workspace, backend: FakeBackend) -> None:
    backend.json("POST", "/auth/admin/token", {"detail": "User is not an admin"}, status_code=403)
    admin = make_admin_workspace({})

    assert asyncio.run(admin.dashboard.login("user@example.com", "secret")) is False

    notification = admin.notifications.drain()[-1]
    assert (notification.title, notification.description) == ("Authentication Error", "User is not an admin")
    assert backend.calls("/documents/list") == []


def test_is_pdf_falls_back_to_filename() -> None:
    assert is_pdf("manual.pdf")
    assert is_pdf("manual.bin", "application/pdf")
    assert not is_pdf("manual.docx")
