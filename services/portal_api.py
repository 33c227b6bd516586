import logging

import requests
from flask import current_app

logger = logging.getLogger(__name__)


class PortalAPIError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PortalUnavailable(PortalAPIError):
    """Gagal di level transport atau respons tidak bisa dibaca."""


class PortalClient:
    def __init__(self, base_url, token, session=None, timeout=10):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, fallback, **kwargs):
        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {self.token}"}
        try:
            response = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise PortalUnavailable(fallback) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error("%s %s returned a non-JSON body (HTTP %s)", method, url, response.status_code)
            raise PortalUnavailable(fallback, response.status_code) from e

        if not response.ok or not data.get("success"):
            message = data.get("error") or data.get("message") or fallback
            logger.warning("%s %s rejected (HTTP %s): %s", method, url, response.status_code, message)
            raise PortalAPIError(message, response.status_code)
        return data

    def list_applications(self):
        data = self._request("GET", "/applications/list", "Gagal memuat data pendaftar")
        return data.get("applications", [])

    def get_stats(self):
        data = self._request("GET", "/applications/stats", "Gagal memuat statistik")
        return data.get("stats")

    def submit_application(self, payload, files=None):
        if files:
            data = self._request(
                "POST", "/applications/submit", "Gagal mengirim pendaftaran", data=payload, files=files
            )
        else:
            data = self._request("POST", "/applications/submit", "Gagal mengirim pendaftaran", json=payload)
        return data["applicationId"]

    def update_status(self, application_id, status, assigned_division):
        return self._request(
            "PATCH",
            f"/applications/{application_id}/status",
            "Gagal memperbarui status",
            json={"status": status, "assignedDivision": assigned_division},
        )

    def check_status(self, identifier):
        data = self._request(
            "POST", "/applications/check-status", "Terjadi kesalahan", json={"identifier": identifier}
        )
        return data.get("result") or {"found": False}


def get_portal_client():
    config = current_app.config
    return PortalClient(
        config["PORTAL_API_URL"],
        config["API_TOKEN"],
        session=current_app.extensions.get("portal_http"),
        timeout=config["PORTAL_API_TIMEOUT"],
    )
