from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required, login_user, logout_user

from models.admin import AdminUser

auth_bp = Blueprint("auth", __name__)


# Login admin
@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("admin.dashboard"))

    if request.method == "POST":
        password = request.form.get("password", "")
        admin = AdminUser.from_config(current_app.config)
        if admin.check_password(password):
            login_user(admin, remember=False)
            flash("Login berhasil!", "success")
            return redirect(url_for("admin.dashboard"))

        current_app.logger.warning("Failed admin login from %s", request.remote_addr)
        flash("Password salah!", "danger")
        return render_template("auth/login.html"), 401

    return render_template("auth/login.html")


# Logout
@auth_bp.route("/logout")
@login_required
def logout():
    logout_user()
    flash("Anda telah logout.", "info")
    return redirect(url_for("home"))
