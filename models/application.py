import enum
import uuid
from datetime import datetime

from sqlalchemy import func

from extensions import db


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @classmethod
    def values(cls):
        return [s.value for s in cls]


def generate_application_id():
    return f"K3-{uuid.uuid4().hex[:10].upper()}"


def semester_sort_key(semester):
    # Urut numerik, semester kosong paling akhir
    if semester and semester.isdigit():
        return (0, int(semester), "")
    return (1, 0, semester or "")


class Application(db.Model):
    __tablename__ = "applications"

    id = db.Column(db.String(32), primary_key=True, default=generate_application_id)

    # Data diri
    full_name = db.Column(db.String(100), nullable=False)
    nim = db.Column(db.String(20), nullable=False, unique=True)
    email = db.Column(db.String(120), nullable=False, index=True)
    phone = db.Column(db.String(20), nullable=False)
    semester = db.Column(db.String(10))
    ipk = db.Column(db.Numeric(3, 2))

    # Pilihan 1 & 2 (proker atau posisi Sekben)
    department1 = db.Column(db.String(100), nullable=False)
    proker1 = db.Column(db.String(150), nullable=False)
    department2 = db.Column(db.String(100), nullable=False)
    proker2 = db.Column(db.String(150), nullable=False)

    motivation = db.Column(db.Text, nullable=False)
    experience = db.Column(db.Text)

    # Berkas (path relatif terhadap static/)
    ktm_file = db.Column(db.String(255))
    commitment_file = db.Column(db.String(255))
    cv_file = db.Column(db.String(255))
    portfolio_file = db.Column(db.String(255))

    status = db.Column(
        db.Enum(*ApplicationStatus.values(), name="application_status"),
        nullable=False,
        default=ApplicationStatus.PENDING.value,
    )
    assigned_division = db.Column(db.String(100), nullable=False)

    submitted_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @classmethod
    def from_record(cls, record, files=None):
        files = files or {}
        ipk = record.get("ipk")
        return cls(
            full_name=record["fullName"],
            nim=record["nim"],
            email=record["email"],
            phone=record["phone"],
            semester=record.get("semester") or None,
            ipk=float(ipk) if ipk not in (None, "") else None,
            department1=record["department1"],
            proker1=record["proker1"],
            department2=record["department2"],
            proker2=record["proker2"],
            motivation=record["motivation"],
            experience=record.get("experience") or None,
            ktm_file=files.get("ktm"),
            commitment_file=files.get("commitmentLetter"),
            cv_file=files.get("cv"),
            portfolio_file=files.get("portfolio"),
            status=ApplicationStatus.PENDING.value,
            assigned_division=record["department1"],
        )

    @classmethod
    def find_by_identifier(cls, identifier):
        identifier = identifier.strip()
        return (
            cls.query.filter(
                db.or_(cls.nim == identifier, func.lower(cls.email) == identifier.lower())
            )
            .order_by(cls.submitted_at.desc())
            .first()
        )

    @classmethod
    def stats(cls):
        by_status = {s: 0 for s in ApplicationStatus.values()}
        for status, count in db.session.query(cls.status, func.count(cls.id)).group_by(cls.status):
            by_status[status] = count

        by_division = {
            division: count
            for division, count in db.session.query(cls.assigned_division, func.count(cls.id))
            .group_by(cls.assigned_division)
            .order_by(cls.assigned_division)
        }
        semester_counts = db.session.query(cls.semester, func.count(cls.id)).group_by(cls.semester).all()
        by_semester = {
            (semester or "-"): count
            for semester, count in sorted(semester_counts, key=lambda row: semester_sort_key(row[0]))
        }

        return {
            "total": sum(by_status.values()),
            "byDivision": by_division,
            "bySemester": by_semester,
            "byStatus": by_status,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "fullName": self.full_name,
            "nim": self.nim,
            "email": self.email,
            "phone": self.phone,
            "semester": self.semester or "",
            "ipk": float(self.ipk) if self.ipk is not None else None,
            "department1": self.department1,
            "proker1": self.proker1,
            "department2": self.department2,
            "proker2": self.proker2,
            "motivation": self.motivation,
            "experience": self.experience or "",
            "status": self.status,
            "assignedDivision": self.assigned_division,
            "submittedAt": self.submitted_at.isoformat() if self.submitted_at else None,
            "attachments": {
                "ktm": self.ktm_file,
                "commitmentLetter": self.commitment_file,
                "cv": self.cv_file,
                "portfolio": self.portfolio_file,
            },
        }

    def to_result(self):
        return {
            "found": True,
            "fullName": self.full_name,
            "nim": self.nim,
            "email": self.email,
            "proker1": self.proker1,
            "department1": self.department1,
            "proker2": self.proker2,
            "department2": self.department2,
            "status": self.status,
            "submittedAt": self.submitted_at.isoformat() if self.submitted_at else None,
        }


# Email unik tanpa membedakan huruf besar/kecil
db.Index("uq_applications_email_lower", func.lower(Application.email), unique=True)
