from collections import namedtuple

Division = namedtuple("Division", ["id", "title", "description", "prokers"])

SEKBEN_DEPARTMENT = "Departemen Sekretaris Bendahara"
MEDINFO_DEPARTMENT = "Departemen MEDINFO"
COPYWRITING = "Copywriting"

# Posisi khusus Sekben, dipilih sebagai pengganti proker
SEKBEN_ROLES = ("Sekretaris", "Bendahara")

DIVISIONS = [
    Division(
        1,
        SEKBEN_DEPARTMENT,
        "Menjamin tata kelola administrasi dan keuangan organisasi yang akuntabel, transparan, dan teratur.",
        (
            "Pelatihan Kesekretariatan dan Kebendaharaan",
            "Musma GD dan AD/ART",
        ),
    ),
    Division(
        2,
        "Departemen PSDM",
        "Berfokus pada pengelolaan dan penguatan hubungan internal organisasi demi terjalinnya komunikasi "
        "yang baik serta sdm organisasi yang berkompeten guna menguatkan nilai kontribusi mahasiswa baik "
        "untuk HIMA maupun Program Studi K3.",
        (
            "Upgrading",
            "OSG (OSH Student Gathering)",
            "Dies Natalis K3",
            "Shield (Safety and Health Introduction Education and Learning Development)",
            "LKMM-Pra TD",
            "Welwis",
        ),
    ),
    Division(
        3,
        "Departemen ILPRES",
        "Menyelenggarakan program kerja yang berkaitan dengan bidang keilmuan dan prestasi Mahasiswa-Mahasiswi "
        "D-IV Keselamatan dan Kesehatan Kerja yang dikemas dengan lingkup program kerja internal hingga "
        "eksternal yang menaungi lingkup prestasi dan informasi untuk Program Studi.",
        (
            "Seminar Nasional K3",
            "Session Sharing",
            "Paper Sharing and Learning (PSL)",
            "K3 Training",
            "Pojok Prestasi",
        ),
    ),
    Division(
        4,
        "Departemen HUBLU",
        "Menjalin dan menjaga hubungan strategis dari lingkup internal dengan mitra eksternal yang bertujuan "
        "untuk menjadikan HIMA K3 UNAIR menjadi organisasi yang kolaboratif dengan memperluas wawasan serta "
        "jaring relasi dengan pihak eksternal.",
        (
            "K3R (K3 Roadshow)",
            "Relation Work Program (WRP)",
            "OSH Welcoming",
            "ONPOSH (Devotion Public Occupational Safety & Health)",
            "Kajian Aksi Strategis",
        ),
    ),
    Division(
        5,
        MEDINFO_DEPARTMENT,
        "Mengelola dan mengembangkan citra publik (branding) serta kanal-kanal komunikasi visual HIMA, serta "
        "bertanggung jawab atas produksi konten, desain grafis, dan dokumentasi visual yang informatif, "
        "menarik, dan relevan.",
        (
            "Creative Design",
            "Creative Media",
            COPYWRITING,
        ),
    ),
    Division(
        6,
        "Departemen EKRAF",
        "Sebagai penggerak perekonomian organisasi dalam bentuk produksi, kreatif, dan marketing merchandise "
        "serta bertanggung jawab sebagai wadah untuk menaungi minat dan bakat Mahasiswa/i di bidang "
        "kewirausahaan.",
        (
            "Safe Merch",
            "OSH FEST",
            "OSHTEN",
        ),
    ),
    Division(
        7,
        "Departemen SENIORA",
        "Menjadi wadah pengembangan minat dan bakat mahasiswa dalam bidang seni, kreativitas, dan olahraga "
        "guna mendukung terciptanya keseimbangan fisik dan mental serta semangat sportivitas dan ekspresi diri.",
        (
            "K3 Running Fest",
            "Kelas Seni",
            "K3 Sport Cup",
            "OSH Cup",
            "Olgarut (Olahraga Rutin)",
        ),
    ),
]


def department_titles():
    return [d.title for d in DIVISIONS]


def placement_departments():
    """Departemen yang bisa dipilih pendaftar (semua kecuali Sekben)."""
    return [d for d in DIVISIONS if d.title != SEKBEN_DEPARTMENT]


def get_division(title):
    for division in DIVISIONS:
        if division.title == title:
            return division
    return None


def prokers_for(title):
    division = get_division(title)
    return list(division.prokers) if division else []


def all_prokers():
    return [
        {"prokerName": proker, "department": division.title}
        for division in DIVISIONS
        for proker in division.prokers
    ]
