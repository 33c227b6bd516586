import hmac
import os
import time

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.utils import secure_filename

from extensions import db
from models.application import Application
from services.validation import (
    ATTACHMENTS,
    clean_record,
    validate_attachments,
    validate_record,
    validate_status_update,
)

api_bp = Blueprint("api", __name__)

# Sub-folder penyimpanan per jenis berkas
UPLOAD_SUBDIRS = {
    "ktm": "ktm",
    "commitmentLetter": "commitment",
    "cv": "cv",
    "portfolio": "portfolio",
}


def error_response(message, status_code, key="error"):
    return jsonify({"success": False, key: message}), status_code


@api_bp.before_request
def require_bearer_token():
    header = request.headers.get("Authorization", "")
    expected = f"Bearer {current_app.config['API_TOKEN']}"
    if not hmac.compare_digest(header.encode(), expected.encode()):
        return error_response("Unauthorized", 401)


@api_bp.errorhandler(RequestEntityTooLarge)
def too_large(e):
    return error_response("Ukuran berkas terlalu besar", 413)


def save_attachment(storage, kind):
    safe = secure_filename(storage.filename)
    fname = f"{int(time.time()*1000)}_{safe}"
    subdir = UPLOAD_SUBDIRS[kind]
    base = os.path.join(current_app.config["UPLOAD_FOLDER_APPLICATIONS"], subdir)
    os.makedirs(base, exist_ok=True)
    storage.save(os.path.join(base, fname))
    return f"uploads/applications/{subdir}/{fname}"


def json_object():
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else None


def find_duplicate(record):
    return Application.query.filter(
        db.or_(Application.nim == record["nim"], func.lower(Application.email) == record["email"].lower())
    ).first()


def remove_attachments(stored):
    folder = current_app.config["UPLOAD_FOLDER_APPLICATIONS"]
    for path in stored.values():
        subdir, fname = path.split("/")[-2:]
        full_path = os.path.join(folder, subdir, fname)
        if os.path.exists(full_path):
            os.remove(full_path)


#-------------------------------------------------------
# Kirim pendaftaran
@api_bp.route("/applications/submit", methods=["POST"])
def submit_application():
    if request.is_json:
        payload = json_object()
        if payload is None:
            return error_response("Body JSON harus berupa objek", 400)
        record = clean_record(payload)
        files = {}
    else:
        record = clean_record(request.form)
        files = request.files

    # Body JSON tidak membawa berkas, jadi berkas wajib tetap dicek
    errors = validate_record(record) + validate_attachments(
        record,
        files,
        current_app.config["ALLOWED_EXTENSIONS"],
        current_app.config["MAX_ATTACHMENT_BYTES"],
    )
    if errors:
        return error_response("; ".join(errors), 400)

    # NIM dan email hanya boleh terdaftar sekali
    if find_duplicate(record):
        return error_response("NIM atau email sudah terdaftar", 409)

    stored = {}
    for kind in ATTACHMENTS:
        storage = files.get(kind)
        if storage and storage.filename:
            stored[kind] = save_attachment(storage, kind)

    application = Application.from_record(record, stored)
    db.session.add(application)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        remove_attachments(stored)
        current_app.logger.warning("Duplicate submission for NIM %s rejected by the database", record["nim"])
        return error_response("NIM atau email sudah terdaftar", 409)

    current_app.logger.info("Application %s submitted by NIM %s", application.id, application.nim)
    return jsonify({"success": True, "applicationId": application.id}), 201


#-------------------------------------------------------
# Daftar & statistik
@api_bp.route("/applications/list")
def list_applications():
    applications = Application.query.order_by(Application.submitted_at.desc()).all()
    return jsonify({"success": True, "applications": [a.to_dict() for a in applications]})


@api_bp.route("/applications/stats")
def application_stats():
    return jsonify({"success": True, "stats": Application.stats()})


#-------------------------------------------------------
# Ubah status + departemen penempatan
@api_bp.route("/applications/<app_id>/status", methods=["PATCH"])
def update_status(app_id):
    payload = json_object()
    if payload is None:
        return error_response("Body JSON harus berupa objek", 400)
    errors = validate_status_update(payload)
    if errors:
        return error_response("; ".join(errors), 400)

    application = db.session.get(Application, app_id)
    if application is None:
        return error_response("Pendaftaran tidak ditemukan", 404)

    application.status = payload["status"]
    if payload.get("assignedDivision"):
        application.assigned_division = payload["assignedDivision"]
    db.session.commit()

    current_app.logger.info(
        "Application %s set to %s (%s)", application.id, application.status, application.assigned_division
    )
    return jsonify({"success": True, "application": application.to_dict()})


#-------------------------------------------------------
# Cek status (NIM atau email)
@api_bp.route("/applications/check-status", methods=["POST"])
def check_status():
    payload = json_object()
    if payload is None:
        return error_response("Body JSON harus berupa objek", 400)
    identifier = str(payload.get("identifier") or "").strip()
    if not identifier:
        return error_response("Masukkan NIM atau Email", 400, key="message")

    application = Application.find_by_identifier(identifier)
    if application is None:
        return jsonify({"success": True, "result": {"found": False}})
    return jsonify({"success": True, "result": application.to_result()})
