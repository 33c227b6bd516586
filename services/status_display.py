import logging
from collections import namedtuple

from models.application import ApplicationStatus

logger = logging.getLogger(__name__)

StatusPresentation = namedtuple("StatusPresentation", ["icon", "tone", "label", "headline", "message"])

STATUS_PRESENTATION = {
    ApplicationStatus.ACCEPTED: StatusPresentation(
        icon="check-circle",
        tone="success",
        label="Diterima",
        headline="Selamat! Anda Diterima 🎉",
        message="Anda telah diterima sebagai anggota Himakesker. Kami akan menghubungi Anda segera "
        "melalui WhatsApp untuk informasi lebih lanjut.",
    ),
    ApplicationStatus.REJECTED: StatusPresentation(
        icon="x-circle",
        tone="danger",
        label="Ditolak",
        headline="Mohon Maaf",
        message="Terima kasih atas minat Anda. Sayangnya, kami belum bisa menerima Anda di periode ini. "
        "Tetap semangat dan jangan menyerah!",
    ),
    ApplicationStatus.PENDING: StatusPresentation(
        icon="clock",
        tone="warning",
        label="Pending",
        headline="Sedang Diproses",
        message="Pendaftaran Anda sedang dalam proses review. Mohon tunggu informasi lebih lanjut.",
    ),
}

_missing = set(ApplicationStatus) - set(STATUS_PRESENTATION)
if _missing:
    raise RuntimeError(f"No presentation for status: {sorted(s.value for s in _missing)}")


def parse_status(value):
    try:
        return ApplicationStatus(value)
    except ValueError:
        logger.warning("Unknown application status %r, showing it as pending", value)
        return ApplicationStatus.PENDING


def presentation_for(value):
    return STATUS_PRESENTATION[parse_status(value)]


def status_label(value):
    return presentation_for(value).label
