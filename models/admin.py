from flask_login import UserMixin
from werkzeug.security import check_password_hash


class AdminUser(UserMixin):
    """Satu-satunya akun admin, kata sandinya diambil dari konfigurasi (bukan tabel)."""

    id = "admin"
    fullname = "Admin"

    def __init__(self, password_hash):
        self.password_hash = password_hash

    @classmethod
    def from_config(cls, config):
        return cls(config["ADMIN_PASSWORD_HASH"])

    def get_id(self):
        return self.id

    def check_password(self, password):
        if not password:
            return False
        return check_password_hash(self.password_hash, password)
