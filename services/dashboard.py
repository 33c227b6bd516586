import csv
import logging
from datetime import date, datetime

import pandas as pd

from services.portal_api import PortalAPIError

logger = logging.getLogger(__name__)

FILTER_ALL = "all"

CSV_HEADERS = [
    "Nama",
    "NIM",
    "Email",
    "Telepon",
    "Semester",
    "IPK",
    "Proker 1",
    "Departemen 1",
    "Proker 2",
    "Departemen 2",
    "Status",
    "Tanggal Daftar",
]


def current_division(application):
    return application.get("assignedDivision") or application.get("department1") or ""


def matches_status(application, status):
    return not status or status == FILTER_ALL or application.get("status") == status


def matches_division(application, division):
    return not division or division == FILTER_ALL or current_division(application) == division


def matches_search(application, term):
    if not term:
        return True
    term = term.lower()
    return any(
        term in (application.get(field) or "").lower() for field in ("fullName", "nim", "email")
    )


def filter_applications(applications, status=FILTER_ALL, division=FILTER_ALL, search=""):
    search = (search or "").strip()
    return [
        a
        for a in applications
        if matches_status(a, status) and matches_division(a, division) and matches_search(a, search)
    ]


def parse_submitted_at(value):
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(value):
    # Format tanggal lokal Indonesia: hari/bulan/tahun tanpa nol di depan
    parsed = parse_submitted_at(value)
    if parsed is None:
        return ""
    return f"{parsed.day}/{parsed.month}/{parsed.year}"


def _csv_row(application):
    ipk = application.get("ipk")
    return [
        application.get("fullName") or "",
        application.get("nim") or "",
        application.get("email") or "",
        application.get("phone") or "",
        application.get("semester") or "",
        "" if ipk is None else str(ipk),
        application.get("proker1") or "",
        application.get("department1") or "",
        application.get("proker2") or "-",
        application.get("department2") or "-",
        application.get("status") or "",
        format_date(application.get("submittedAt")),
    ]


def export_csv(applications):
    header = ",".join(CSV_HEADERS)
    if not applications:
        return header

    df = pd.DataFrame([_csv_row(a) for a in applications], columns=CSV_HEADERS, dtype=str)
    body = df.to_csv(index=False, header=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    return header + "\n" + body.rstrip("\n")


def export_filename(today=None):
    today = today or date.today()
    return f"pendaftaran_{today.isoformat()}.csv"


class DashboardState:
    """Data dashboard admin untuk satu request: daftar, statistik, dan detail terpilih."""

    def __init__(self, client):
        self.client = client
        self.applications = []
        self.stats = None
        self.selected = None

    def load(self):
        self.applications = self.client.list_applications()
        self.stats = self.client.get_stats()

    def find(self, application_id):
        for application in self.applications:
            if application.get("id") == application_id:
                return application
        return None

    def select(self, application_id):
        self.selected = self.find(application_id)
        return self.selected

    def default_assigned_division(self):
        if self.selected is None:
            return None
        return current_division(self.selected)

    def division_options(self):
        if not self.stats:
            return []
        return list(self.stats.get("byDivision", {}).keys())

    def filtered(self, status=FILTER_ALL, division=FILTER_ALL, search=""):
        return filter_applications(self.applications, status, division, search)

    def update_status(self, application_id, status, assigned_division):
        """Kirim perubahan status ke backend.

        Daftar dan statistik tidak ditambal di sini: halaman dashboard memuat
        ulang keduanya dari backend setelah redirect.
        """
        try:
            self.client.update_status(application_id, status, assigned_division)
        except PortalAPIError as e:
            logger.error("Updating status of %s to %s failed: %s", application_id, status, e.message)
            return False

        self.selected = None
        return True
