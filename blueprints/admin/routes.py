import io

from flask import Blueprint, abort, current_app, flash, redirect, render_template, request, send_file, url_for
from flask_login import current_user, login_required

from models.division import department_titles
from services.dashboard import FILTER_ALL, DashboardState, export_csv, export_filename
from services.portal_api import PortalAPIError, get_portal_client
from services.status_display import STATUS_PRESENTATION, status_label

admin_bp = Blueprint("admin", __name__)


# Middleware: hanya admin yang boleh masuk
@admin_bp.before_request
def restrict_to_admin():
    if not current_user.is_authenticated:
        flash("Silakan login sebagai admin.", "danger")
        return redirect(url_for("auth.login"))


def current_filters():
    return {
        "status": request.args.get("status", FILTER_ALL),
        "division": request.args.get("division", FILTER_ALL),
        "q": request.args.get("q", "").strip(),
    }


def load_state():
    state = DashboardState(get_portal_client())
    try:
        state.load()
    except PortalAPIError as e:
        current_app.logger.error("Loading dashboard data failed: %s", e.message)
        flash(e.message, "danger")
    return state


#-------------------------------------------------------
# Dashboard
@admin_bp.route("/dashboard")
@login_required
def dashboard():
    filters = current_filters()
    state = load_state()
    applications = state.filtered(filters["status"], filters["division"], filters["q"])

    return render_template(
        "admin/dashboard.html",
        applications=applications,
        stats=state.stats,
        division_options=state.division_options(),
        status_options=[s.value for s in STATUS_PRESENTATION],
        status_label=status_label,
        filters=filters,
    )


# Export CSV (hanya baris yang sedang difilter)
@admin_bp.route("/export.csv")
@login_required
def export_applications():
    filters = current_filters()
    state = load_state()
    applications = state.filtered(filters["status"], filters["division"], filters["q"])

    output = io.BytesIO(export_csv(applications).encode("utf-8"))
    return send_file(
        output,
        as_attachment=True,
        download_name=export_filename(),
        mimetype="text/csv",
    )


#-------------------------------------------------------
# Detail pendaftar
@admin_bp.route("/applications/<app_id>")
@login_required
def application_detail(app_id):
    state = load_state()
    application = state.select(app_id)
    if application is None:
        abort(404)

    return render_template(
        "admin/application_detail.html",
        application=application,
        assigned_division=state.default_assigned_division(),
        departments=department_titles(),
        status_label=status_label,
    )


@admin_bp.route("/applications/<app_id>/status", methods=["POST"])
@login_required
def update_application_status(app_id):
    status = request.form.get("status")
    assigned_division = request.form.get("assigned_division")

    # Daftar dan statistik dimuat ulang oleh dashboard setelah redirect
    state = DashboardState(get_portal_client())
    if state.update_status(app_id, status, assigned_division):
        flash(f"Status pendaftar diperbarui menjadi {status_label(status)}.", "success")
        return redirect(url_for("admin.dashboard"))

    flash("Gagal memperbarui status. Silakan coba lagi.", "danger")
    return redirect(url_for("admin.application_detail", app_id=app_id))
