import re

from models.application import ApplicationStatus
from models.division import (
    COPYWRITING,
    MEDINFO_DEPARTMENT,
    SEKBEN_DEPARTMENT,
    SEKBEN_ROLES,
    department_titles,
    prokers_for,
)

REQUIRED_FIELDS = (
    "fullName",
    "nim",
    "email",
    "phone",
    "department1",
    "proker1",
    "department2",
    "proker2",
    "motivation",
)
OPTIONAL_FIELDS = ("semester", "ipk", "experience")
FIELDS = REQUIRED_FIELDS + OPTIONAL_FIELDS

FIELD_LABELS = {
    "fullName": "Nama Lengkap",
    "nim": "NIM",
    "email": "Email",
    "phone": "No. WhatsApp",
    "semester": "Semester",
    "ipk": "IPK",
    "department1": "Departemen Pilihan 1",
    "proker1": "Program Kerja Pilihan 1",
    "department2": "Departemen Pilihan 2",
    "proker2": "Program Kerja Pilihan 2",
    "motivation": "Motivasi",
    "experience": "Pengalaman",
}

ATTACHMENTS = ("ktm", "commitmentLetter", "cv", "portfolio")
ATTACHMENT_LABELS = {
    "ktm": "Scan KTM",
    "commitmentLetter": "Surat Komitmen",
    "cv": "CV",
    "portfolio": "Portofolio",
}

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def clean_record(data):
    return {name: str(data.get(name) or "").strip() for name in FIELDS}


def missing_fields(record):
    return [name for name in REQUIRED_FIELDS if not (record.get(name) or "").strip()]


def is_sekben_choice(proker):
    return proker in SEKBEN_ROLES


def needs_portfolio(record):
    # MEDINFO wajib portofolio kecuali proker Copywriting
    for slot in (1, 2):
        if record.get(f"department{slot}") == MEDINFO_DEPARTMENT and record.get(f"proker{slot}") != COPYWRITING:
            return True
    return False


def required_attachments(record):
    names = ["ktm", "commitmentLetter", "cv"]
    if needs_portfolio(record):
        names.append("portfolio")
    return names


def validate_preference(record, slot):
    department = record.get(f"department{slot}")
    proker = record.get(f"proker{slot}")
    if not department or not proker:
        return []

    if department not in department_titles():
        return [f"Departemen pilihan {slot} tidak dikenal: {department}"]

    if is_sekben_choice(proker):
        if department == SEKBEN_DEPARTMENT:
            return [f"Posisi {proker} pada pilihan {slot} harus ditempatkan di departemen lain"]
        return []

    if proker not in prokers_for(department):
        return [f"Program kerja '{proker}' tidak ada di {department}"]
    return []


def validate_record(record):
    errors = []

    missing = missing_fields(record)
    if missing:
        errors.append("Kolom wajib belum diisi: " + ", ".join(FIELD_LABELS[name] for name in missing))

    email = record.get("email")
    if email and not EMAIL_RE.match(email):
        errors.append("Format email tidak valid")

    ipk = record.get("ipk")
    if ipk:
        try:
            value = float(ipk)
        except ValueError:
            errors.append("IPK harus berupa angka")
        else:
            if not 0 <= value <= 4:
                errors.append("IPK harus di antara 0.00 dan 4.00")

    semester = record.get("semester")
    if semester and not (semester.isdigit() and int(semester) > 0):
        errors.append("Semester harus berupa angka positif")

    errors.extend(validate_preference(record, 1))
    errors.extend(validate_preference(record, 2))

    if (
        record.get("department1")
        and record.get("proker1")
        and record.get("department1") == record.get("department2")
        and record.get("proker1") == record.get("proker2")
    ):
        errors.append("Pilihan 1 dan Pilihan 2 tidak boleh sama")

    return errors


def file_size(storage):
    stream = storage.stream
    position = stream.tell()
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(position)
    return size


def allowed_attachment(filename, allowed_extensions):
    return "." in filename and filename.rsplit(".", 1)[1].lower() in allowed_extensions


def validate_attachments(record, files, allowed_extensions, max_bytes):
    errors = []
    for name in required_attachments(record):
        storage = files.get(name)
        if not storage or not storage.filename:
            errors.append(f"Berkas {ATTACHMENT_LABELS[name]} wajib diunggah")

    for name in ATTACHMENTS:
        storage = files.get(name)
        if not storage or not storage.filename:
            continue
        label = ATTACHMENT_LABELS[name]
        if not allowed_attachment(storage.filename, allowed_extensions):
            errors.append(f"Berkas {label} harus berformat PDF")
            continue
        size = file_size(storage)
        if size == 0:
            errors.append(f"Berkas {label} kosong")
        elif size > max_bytes:
            errors.append(f"Berkas {label} melebihi {max_bytes // (1024 * 1024)}MB")
    return errors


def validate_status_update(payload):
    errors = []
    status = payload.get("status")
    if status not in ApplicationStatus.values():
        errors.append(f"Status tidak valid: {status}")

    division = payload.get("assignedDivision")
    if division is not None and division not in department_titles():
        errors.append(f"Departemen tidak dikenal: {division}")
    return errors
