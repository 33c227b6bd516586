from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from services.application_form import SLOTS, ApplicationDraft
from services.portal_api import PortalAPIError, PortalUnavailable, get_portal_client
from services.status_display import presentation_for
from services.validation import ATTACHMENT_LABELS, ATTACHMENTS

recruitment_bp = Blueprint("recruitment", __name__)


def render_form(draft, status_code=200):
    return (
        render_template(
            "recruitment/apply.html",
            draft=draft,
            slots=SLOTS,
            attachment_labels=ATTACHMENT_LABELS,
        ),
        status_code,
    )


def collect_files(files):
    collected = {}
    for name in ATTACHMENTS:
        storage = files.get(name)
        if storage and storage.filename:
            collected[name] = (storage.filename, storage.stream, storage.mimetype or "application/pdf")
    return collected


#-------------------------------------------------------
# Formulir pendaftaran
@recruitment_bp.route("/daftar", methods=["GET", "POST"])
def apply():
    if request.method == "GET":
        return render_form(ApplicationDraft())

    draft = ApplicationDraft.from_form(request.form)
    action = request.form.get("action", "submit")

    # Toggle Sekben / ganti departemen cukup render ulang formulir
    if action.startswith("toggle_sekben"):
        slot = 2 if action.endswith("2") else 1
        draft.toggle_sekben(slot)
        return render_form(draft)
    if action == "refresh":
        return render_form(draft)

    errors = draft.validate(request.files)
    if errors:
        for message in errors:
            flash(message, "danger")
        return render_form(draft, 400)

    try:
        application_id = get_portal_client().submit_application(
            draft.to_payload(), files=collect_files(request.files)
        )
    except PortalUnavailable:
        current_app.logger.exception("Submitting application for NIM %s failed", draft.data["nim"])
        flash("Terjadi kesalahan saat mengirim pendaftaran", "danger")
        return render_form(draft, 502)
    except PortalAPIError as e:
        flash(e.message, "danger")
        return render_form(draft, 400)

    return redirect(url_for("recruitment.submitted", application_id=application_id))


@recruitment_bp.route("/daftar/berhasil/<application_id>")
def submitted(application_id):
    return render_template(
        "recruitment/submitted.html",
        application_id=application_id,
        reset_seconds=current_app.config["FORM_RESET_SECONDS"],
    )


#-------------------------------------------------------
# Cek status pendaftaran
@recruitment_bp.route("/cek-status", methods=["GET", "POST"])
def check_status():
    identifier = ""
    result = None
    presentation = None

    if request.method == "POST":
        identifier = (request.form.get("identifier") or "").strip()
        if not identifier:
            flash("Masukkan NIM atau Email", "danger")
            return render_template("recruitment/status.html", identifier=identifier), 400

        try:
            result = get_portal_client().check_status(identifier)
        except PortalUnavailable:
            current_app.logger.exception("Status check failed")
            flash("Gagal mengecek status. Coba lagi nanti.", "danger")
        except PortalAPIError as e:
            flash(e.message, "danger")
        else:
            if result.get("found"):
                presentation = presentation_for(result.get("status"))

    return render_template(
        "recruitment/status.html",
        identifier=identifier,
        result=result,
        presentation=presentation,
    )
