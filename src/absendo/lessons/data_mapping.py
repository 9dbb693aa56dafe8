"""
Lookup tables for teacher and subject short codes (BBZW, school year 24/25).
"""

from typing import Dict

TEACHERS: Dict[str, str] = {
    "AMS": "Amstutz Reto",
    "BAU": "Bauer Claudia",
    "BUE": "Bühler Stefan",
    "FIS": "Fischer Andrea",
    "GAS": "Gasser Thomas",
    "HUB": "Huber Monika",
    "KEL": "Keller Daniel",
    "MEI": "Meier Hans",
    "MUE": "Müller Sandra",
    "SCH": "Schmid Peter",
    "STE": "Steiner Marco",
    "WEB": "Weber Nicole",
    "WYS": "Wyss Lukas",
    "ZIM": "Zimmermann Karin",
}

SUBJECTS: Dict[str, str] = {
    "ABU": "Allgemeinbildender Unterricht",
    "BWL": "Betriebswirtschaftslehre",
    "D": "Deutsch",
    "E": "Englisch",
    "F": "Französisch",
    "GES": "Geschichte und Politik",
    "INF": "Informatik",
    "M": "Mathematik",
    "NW": "Naturwissenschaften",
    "SPO": "Sport",
    "W&G": "Wirtschaft und Gesellschaft",
    "WR": "Wirtschaft und Recht",
}


def get_teacher_name(code: str) -> str:
    """Get the full teacher name for a short code, or the code itself if unknown."""
    return TEACHERS.get(code, code)


def get_subject_name(code: str) -> str:
    """Get the full subject name for a short code, or the code itself if unknown."""
    return SUBJECTS.get(code, code)
