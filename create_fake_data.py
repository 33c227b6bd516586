import random
from datetime import datetime, timedelta

from extensions import db
from models import Application, ApplicationStatus
from models.division import SEKBEN_ROLES, placement_departments

# ====== CONFIG ======
NUM_APPLICATIONS = 40  # jumlah pendaftar dummy
SEKBEN_RATE = 0.15
REGISTRATION_START = datetime(2026, 1, 5)
FIRST_NAMES = ["Budi", "Siti", "Andi", "Rina", "Dewi", "Agus", "Putri", "Rizky", "Nadia", "Fajar"]
LAST_NAMES = ["Santoso", "Lestari", "Pratama", "Kartika", "Wijaya", "Saputra", "Rahmawati", "Hidayat"]
# =====================


def random_date(base_date, days_range=5):
    """Tanggal acak beberapa hari setelah base_date"""
    return base_date + timedelta(days=random.randint(0, days_range), minutes=random.randint(0, 24 * 60))


def random_preference(taken=None):
    department = random.choice(placement_departments())
    if random.random() < SEKBEN_RATE:
        roles = [r for r in SEKBEN_ROLES if (department.title, r) != taken]
        return department.title, random.choice(roles)

    choices = [p for p in department.prokers if (department.title, p) != taken]
    return department.title, random.choice(choices)


def make_application(index):
    department1, proker1 = random_preference()
    department2, proker2 = random_preference(taken=(department1, proker1))
    first, last = random.choice(FIRST_NAMES), random.choice(LAST_NAMES)
    status = random.choice(ApplicationStatus.values())

    return Application(
        full_name=f"{first} {last}",
        nim=f"1621112{index:05d}",
        email=f"{first.lower()}.{last.lower()}{index}@student.unair.ac.id",
        phone=f"08{random.randint(1000000000, 9999999999)}",
        semester=str(random.choice([1, 3, 5])),
        ipk=round(random.uniform(3.0, 4.0), 2),
        department1=department1,
        proker1=proker1,
        department2=department2,
        proker2=proker2,
        motivation="Ingin berkontribusi dan belajar bersama HIMA K3.",
        experience=random.choice(["", "Panitia PKKMB", "Anggota OSIS"]) or None,
        status=status,
        assigned_division=department1,
        submitted_at=random_date(REGISTRATION_START),
    )


def create_applications(count=NUM_APPLICATIONS):
    print("📦 Membuat data pendaftar dummy...")
    # NIM dan email unik, jadi lanjutkan nomor dari data yang sudah ada
    start = Application.query.count() + 1
    applications = [make_application(i) for i in range(start, start + count)]
    db.session.add_all(applications)
    db.session.commit()
    print(f"✅ Berhasil membuat {len(applications)} pendaftar.")
    return applications


if __name__ == "__main__":
    from app import app

    with app.app_context():
        db.create_all()
        create_applications()
