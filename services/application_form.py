from models.division import SEKBEN_ROLES, placement_departments, prokers_for
from services.validation import (
    ATTACHMENT_LABELS,
    FIELD_LABELS,
    FIELDS,
    clean_record,
    missing_fields,
    needs_portfolio,
    required_attachments,
)

SLOTS = (1, 2)


def _other(slot):
    return 2 if slot == 1 else 1


class ApplicationDraft:
    """State formulir pendaftaran untuk satu request.

    Formulir membawa state-nya sendiri (flag Sekben dan departemen sebelumnya
    sebagai hidden input), jadi tidak ada state yang disimpan di server.
    """

    def __init__(self, data=None, sekben1=False, sekben2=False):
        self.data = clean_record(data or {})
        self.sekben = {1: bool(sekben1), 2: bool(sekben2)}

    @classmethod
    def from_form(cls, form):
        draft = cls(form, sekben1=form.get("sekben1") == "1", sekben2=form.get("sekben2") == "1")
        for slot in SLOTS:
            previous = form.get(f"previousDepartment{slot}")
            if previous is None:
                continue
            current = draft.department(slot)
            draft.data[f"department{slot}"] = previous.strip()
            draft.set_department(slot, current)
        return draft

    def department(self, slot):
        return self.data[f"department{slot}"]

    def proker(self, slot):
        return self.data[f"proker{slot}"]

    def is_sekben(self, slot):
        return self.sekben[slot]

    def toggle_sekben(self, slot, enabled=None):
        if enabled is None:
            enabled = not self.sekben[slot]
        self.sekben[slot] = bool(enabled)
        # Ganti mode selalu mengosongkan pilihan terkait
        self.data[f"department{slot}"] = ""
        self.data[f"proker{slot}"] = ""

    def set_department(self, slot, department):
        if department != self.department(slot):
            self.data[f"proker{slot}"] = ""
        self.data[f"department{slot}"] = department

    def set_proker(self, slot, proker):
        self.data[f"proker{slot}"] = proker

    def department_options(self, slot):
        return [d.title for d in placement_departments()]

    def proker_options(self, slot):
        department = self.department(slot)
        other = _other(slot)
        # Pasangan (departemen, proker/posisi) yang sama tidak boleh dipilih dua kali
        taken = self.proker(other) if department and self.department(other) == department else None

        if self.sekben[slot]:
            return [r for r in SEKBEN_ROLES if r != taken]
        if not department:
            return []
        return [p for p in prokers_for(department) if p != taken]

    @property
    def needs_portfolio(self):
        return needs_portfolio(self.data)

    def required_attachments(self):
        return required_attachments(self.data)

    def validate(self, files):
        errors = []
        missing = missing_fields(self.data)
        if missing:
            errors.append("Kolom wajib belum diisi: " + ", ".join(FIELD_LABELS[name] for name in missing))

        for name in self.required_attachments():
            storage = files.get(name)
            if not storage or not storage.filename:
                errors.append(f"Berkas {ATTACHMENT_LABELS[name]} wajib diunggah")
        return errors

    def to_payload(self):
        return {name: self.data[name] for name in FIELDS}

    def reset(self):
        self.data = clean_record({})
        self.sekben = {1: False, 2: False}
