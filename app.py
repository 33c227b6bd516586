import logging
import os
from datetime import datetime

from dotenv import load_dotenv
from flask import Flask, render_template
from flask_login import LoginManager
from flask_migrate import Migrate
from werkzeug.security import generate_password_hash

from extensions import db

# Setup Flask
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)

app = Flask(__name__)
app.config['SECRET_KEY'] = os.getenv("SECRET_KEY", "secret_key")
app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv("DATABASE_URL", "sqlite:///recruitment.db")
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

# Token statis untuk semua panggilan ke /api (tidak terikat user)
app.config["API_TOKEN"] = os.getenv("API_TOKEN", "oprec-public-anon-key")
app.config["PORTAL_API_URL"] = os.getenv("PORTAL_API_URL", "http://127.0.0.1:5000/api")
app.config["PORTAL_API_TIMEOUT"] = float(os.getenv("PORTAL_API_TIMEOUT", "10"))

# Password admin: boleh hash siap pakai atau plaintext dari env
app.config["ADMIN_PASSWORD_HASH"] = os.getenv("ADMIN_PASSWORD_HASH") or generate_password_hash(
    os.getenv("ADMIN_PASSWORD", "admin123")
)

# Upload berkas pendaftaran (PDF, max 2MB/file)
UPLOAD_FOLDER_APPLICATIONS = os.path.join(os.path.dirname(__file__), "static", "uploads", "applications")
os.makedirs(UPLOAD_FOLDER_APPLICATIONS, exist_ok=True)

app.config["UPLOAD_FOLDER_APPLICATIONS"] = UPLOAD_FOLDER_APPLICATIONS
app.config["ALLOWED_EXTENSIONS"] = {"pdf"}
app.config["MAX_ATTACHMENT_BYTES"] = 2 * 1024 * 1024
app.config["MAX_CONTENT_LENGTH"] = 10 * 1024 * 1024

# Formulir kembali kosong 5 detik setelah berhasil terkirim
app.config["FORM_RESET_SECONDS"] = 5

GUIDEBOOK_URL = "https://drive.google.com/drive/folders/1eGqwTforfjs4ZGsF9nWCzLw1_qS9IxV6?usp=sharing"

GENERAL_REQUIREMENTS = [
    "Mahasiswa aktif D4 K3 Universitas Airlangga",
    "IPK minimal 3.00",
    "Belum pernah terlibat dalam tindak pelanggaran",
    "Scan KTM dan KRS semester aktif",
    "Surat rekomendasi dari dosen (opsional)",
]

SOFT_SKILLS = [
    "Komitmen tinggi terhadap organisasi",
    "Mampu bekerja dalam tim",
    "Komunikatif dan proaktif",
    "Bertanggung jawab dan disiplin",
    "Memiliki inisiatif dan kreativitas",
]

TIMELINE = [
    {"date": "05-10 Januari 2026", "title": "Pendaftaran", "description": "Periode pendaftaran open recruitment dibuka"},
    {"date": "11-14 Januari 2026", "title": "Wawancara", "description": "Wawancara dengan Departemen Pilihan"},
    {"date": "17 Januari 2026", "title": "Pengumuman", "description": "Pengumuman hasil seleksi"},
]


# Inisialisasi db, migrate
db.init_app(app)
migrate = Migrate(app, db)

# Login Manager
login_manager = LoginManager(app)
login_manager.login_view = "auth.login"

# Import models setelah db di-init
from models import AdminUser, Application
from models.division import DIVISIONS
from services.dashboard import format_date


# Import blueprints
from blueprints.api.routes import api_bp
app.register_blueprint(api_bp, url_prefix="/api")

from blueprints.recruitment.routes import recruitment_bp
app.register_blueprint(recruitment_bp)

from blueprints.auth.routes import auth_bp
app.register_blueprint(auth_bp, url_prefix="/auth")

from blueprints.admin.routes import admin_bp
app.register_blueprint(admin_bp, url_prefix="/admin")

app.add_template_filter(format_date, "submitted_date")

@login_manager.user_loader
def load_user(user_id):
    if user_id == AdminUser.id:
        return AdminUser.from_config(app.config)
    return None

@app.route("/")
def home():
    return render_template(
        "home.html",
        divisions=DIVISIONS,
        requirements=GENERAL_REQUIREMENTS,
        soft_skills=SOFT_SKILLS,
        timeline=TIMELINE,
        guidebook_url=GUIDEBOOK_URL,
        year=datetime.now().year,
    )

if __name__ == "__main__":
    app.run(debug=True)
