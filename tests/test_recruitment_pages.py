"""Public pages: application form round-trips, submission and status check."""

import pytest
import requests

from conftest import RecordingSession

pytestmark = [pytest.mark.web, pytest.mark.integration]


def _form(multipart_factory, action="submit", **kw):
    data = multipart_factory(**kw)
    data.update(
        {
            "action": action,
            "sekben1": "0",
            "sekben2": "0",
            "previousDepartment1": data["department1"],
            "previousDepartment2": data["department2"],
        }
    )
    return data


# ---------- form ----------
def test_empty_form_renders(client):
    response = client.get("/daftar")
    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert "Kirim Pendaftaran" in html
    assert "Pilih departemen dulu" in html
    assert 'name="portfolio"' not in html


def test_toggle_sekben_resets_preference(client):
    response = client.post(
        "/daftar",
        data={
            "action": "toggle_sekben1",
            "sekben1": "0",
            "department1": "Departemen PSDM",
            "proker1": "Upgrading",
            "previousDepartment1": "Departemen PSDM",
        },
    )
    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert 'name="sekben1" value="1"' in html
    assert "Batal Sekben" in html
    assert 'value="Sekretaris"' in html
    assert "Upgrading" not in html


def test_refresh_adds_portfolio_input_for_medinfo(client):
    response = client.post(
        "/daftar",
        data={
            "action": "refresh",
            "department1": "Departemen MEDINFO",
            "proker1": "Creative Design",
            "previousDepartment1": "Departemen MEDINFO",
        },
    )
    assert 'name="portfolio"' in response.get_data(as_text=True)


def test_missing_files_are_caught_before_any_call(client, portal_http, record_factory):
    data = record_factory()
    data["action"] = "submit"
    response = client.post("/daftar", data=data, content_type="multipart/form-data")
    assert response.status_code == 400
    assert "Berkas Scan KTM wajib diunggah" in response.get_data(as_text=True)
    assert portal_http.calls == []


def test_submit_then_check_status(client, portal_http, multipart_factory):
    """Budi submits, lands on the confirmation page, then checks by email."""
    response = client.post("/daftar", data=_form(multipart_factory), content_type="multipart/form-data")
    assert response.status_code == 302
    assert "/daftar/berhasil/K3-" in response.headers["Location"]
    assert portal_http.calls[0][0] == "POST"

    confirmation = client.get(response.headers["Location"]).get_data(as_text=True)
    assert "Pendaftaran Berhasil!" in confirmation
    assert 'content="5;url=/daftar"' in confirmation

    status = client.post("/cek-status", data={"identifier": "budi@x.id"})
    html = status.get_data(as_text=True)
    assert status.status_code == 200
    assert "Sedang Diproses" in html
    assert 'data-status-icon="clock"' in html
    assert "Upgrading" in html


def test_backend_rejection_is_shown_on_the_form(client, multipart_factory):
    response = client.post(
        "/daftar", data=_form(multipart_factory, email="budi"), content_type="multipart/form-data"
    )
    assert response.status_code == 400
    html = response.get_data(as_text=True)
    assert "Format email tidak valid" in html
    assert 'value="Budi"' in html


def test_duplicate_submission_is_reported(client, multipart_factory):
    first = client.post("/daftar", data=_form(multipart_factory), content_type="multipart/form-data")
    assert first.status_code == 302
    second = client.post("/daftar", data=_form(multipart_factory), content_type="multipart/form-data")
    assert second.status_code == 400
    assert "NIM atau email sudah terdaftar" in second.get_data(as_text=True)


def test_unreachable_backend_shows_generic_error(client, use_portal_session, multipart_factory):
    use_portal_session(RecordingSession(exc=requests.ConnectionError("refused")))
    response = client.post("/daftar", data=_form(multipart_factory), content_type="multipart/form-data")
    assert response.status_code == 502
    assert "Terjadi kesalahan saat mengirim pendaftaran" in response.get_data(as_text=True)


# ---------- status check ----------
def test_empty_identifier_makes_no_call(client, use_portal_session):
    session = use_portal_session(RecordingSession())
    response = client.post("/cek-status", data={"identifier": "   "})
    assert response.status_code == 400
    assert "Masukkan NIM atau Email" in response.get_data(as_text=True)
    assert session.calls == []


def test_unknown_identifier_shows_not_found(client):
    html = client.post("/cek-status", data={"identifier": "000"}).get_data(as_text=True)
    assert "Data Tidak Ditemukan" in html


@pytest.mark.parametrize(
    "status, headline, icon",
    [("accepted", "Selamat! Anda Diterima", "check-circle"), ("rejected", "Mohon Maaf", "x-circle")],
)
def test_reviewed_status_is_presented(client, make_application, status, headline, icon):
    make_application(status=status)
    html = client.post("/cek-status", data={"identifier": "162111200001"}).get_data(as_text=True)
    assert headline in html
    assert f'data-status-icon="{icon}"' in html


def test_status_check_transport_failure(client, use_portal_session):
    use_portal_session(RecordingSession(exc=requests.Timeout("slow")))
    html = client.post("/cek-status", data={"identifier": "1"}).get_data(as_text=True)
    assert "Gagal mengecek status. Coba lagi nanti." in html
