"""Shared test helpers: env + PATH setup, HTTP fakes for the portal client, and common fixtures."""

from __future__ import annotations

import io
import os
import sys
from pathlib import Path

import pytest

# Ensure the project root is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# app.py reads its configuration at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "x" * 64
os.environ["API_TOKEN"] = "test-token"
os.environ["ADMIN_PASSWORD"] = "admin123"
os.environ.pop("ADMIN_PASSWORD_HASH", None)
os.environ["PORTAL_API_URL"] = "http://portal.test/api"

from app import app as flask_app  # noqa: E402
from extensions import db  # noqa: E402
from models.application import Application  # noqa: E402

PORTAL_HOST = "http://portal.test"
API_HEADERS = {"Authorization": "Bearer test-token"}
PDF_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\n%%EOF\n"


# ---------- requests-compatible fakes ----------
class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int, payload=None) -> None:
        self.status_code = status_code
        self.ok = status_code < 400
        self._payload = payload

    def json(self):
        """Return the JSON payload or raise ValueError like requests does."""
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FlaskClientSession:
    """Routes PortalClient HTTP calls into the app's own /api blueprint."""

    def __init__(self, client) -> None:
        self.client = client
        self.calls: list[tuple[str, str]] = []

    def request(self, method, url, headers=None, json=None, data=None, files=None, timeout=None):  # pylint: disable=unused-argument
        """Translate a requests-style call into a Flask test client call."""
        self.calls.append((method, url))
        path = url[len(PORTAL_HOST):] if url.startswith(PORTAL_HOST) else url

        if files:
            form = dict(data or {})
            for name, (filename, stream, mimetype) in files.items():
                form[name] = (stream, filename, mimetype)
            response = self.client.open(
                path, method=method, headers=headers, data=form, content_type="multipart/form-data"
            )
        else:
            response = self.client.open(path, method=method, headers=headers, json=json)
        return FakeResponse(response.status_code, response.get_json(silent=True))


class RecordingSession:
    """Records every call and answers with a canned response (or raises)."""

    def __init__(self, response: FakeResponse | None = None, exc: Exception | None = None) -> None:
        self.calls: list[dict] = []
        self.response = response or FakeResponse(200, {"success": True})
        self.exc = exc

    def request(self, method, url, **kwargs):
        """Record the call; raise the configured exception or return the canned response."""
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.exc:
            raise self.exc
        return self.response


# ---------- App/client fixtures ----------
@pytest.fixture()
def app(tmp_path: Path):
    """App bound to a fresh in-memory database and a temp upload folder."""
    flask_app.config.update(
        TESTING=True,
        UPLOAD_FOLDER_APPLICATIONS=str(tmp_path / "uploads"),
    )
    flask_app.extensions["portal_http"] = FlaskClientSession(flask_app.test_client())

    with flask_app.app_context():
        db.create_all()

    yield flask_app

    with flask_app.app_context():
        db.session.remove()
        db.drop_all()
    flask_app.extensions.pop("portal_http", None)


@pytest.fixture()
def client(app):  # pylint: disable=redefined-outer-name
    """Flask test client."""
    return app.test_client()


@pytest.fixture()
def portal_http(app):  # pylint: disable=redefined-outer-name
    """The session the portal client uses; exposes .calls."""
    return app.extensions["portal_http"]


@pytest.fixture()
def use_portal_session(app):  # pylint: disable=redefined-outer-name
    """Swap the portal HTTP session for a custom fake."""

    def _use(session):
        app.extensions["portal_http"] = session
        return session

    return _use


@pytest.fixture()
def admin_client(client):  # pylint: disable=redefined-outer-name
    """Test client already logged in as admin."""
    response = client.post("/auth/login", data={"password": "admin123"})
    assert response.status_code == 302
    return client


@pytest.fixture(scope="session")
def api_headers():
    """Authorization header carrying the static bearer token."""
    return dict(API_HEADERS)


# ---------- Data factories ----------
@pytest.fixture()
def pdf():
    """Factory for an in-memory PDF upload tuple (stream, filename)."""

    def make(filename: str = "berkas.pdf", content: bytes = PDF_BYTES):
        return (io.BytesIO(content), filename)

    return make


@pytest.fixture()
def record_factory():
    """Factory for a valid submission record (wire field names)."""

    def make(**kw):
        record = {
            "fullName": "Budi",
            "nim": "162111233044",
            "email": "budi@x.id",
            "phone": "08123456789",
            "semester": "3",
            "ipk": "3.75",
            "department1": "Departemen PSDM",
            "proker1": "Upgrading",
            "department2": "Departemen EKRAF",
            "proker2": "Safe Merch",
            "motivation": "Ingin berkontribusi untuk HIMA K3.",
            "experience": "",
        }
        record.update(kw)
        return record

    return make


@pytest.fixture()
def multipart_factory(record_factory, pdf):  # pylint: disable=redefined-outer-name
    """Factory for a full multipart body: record fields plus required PDFs."""

    def make(portfolio: bool = False, **kw):
        data = record_factory(**kw)
        data["ktm"] = pdf("ktm.pdf")
        data["commitmentLetter"] = pdf("surat_komitmen.pdf")
        data["cv"] = pdf("cv.pdf")
        if portfolio:
            data["portfolio"] = pdf("portofolio.pdf")
        return data

    return make


@pytest.fixture()
def make_application(app):  # pylint: disable=redefined-outer-name
    """Insert an Application row directly and return its id."""

    def make(**kw):
        fields = {
            "full_name": "Siti Lestari",
            "nim": "162111200001",
            "email": "siti@x.id",
            "phone": "0811111111",
            "semester": "3",
            "ipk": 3.5,
            "department1": "Departemen ILPRES",
            "proker1": "K3 Training",
            "department2": "Departemen SENIORA",
            "proker2": "Kelas Seni",
            "motivation": "Belajar.",
            "status": "pending",
        }
        fields.update(kw)
        fields.setdefault("assigned_division", fields["department1"])
        with app.app_context():
            application = Application(**fields)
            db.session.add(application)
            db.session.commit()
            return application.id

    return make
