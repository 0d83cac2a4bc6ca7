"""Helpers for UEMOA phone numbers, identifiers and score grades."""

import re

# Country code -> international dialing prefix (UEMOA zone).
UEMOA_PREFIXES: dict[str, str] = {
    "CI": "+225",
    "SN": "+221",
    "ML": "+223",
    "BF": "+226",
    "BJ": "+229",
    "TG": "+228",
    "NE": "+227",
    "GW": "+245",
}

_UEMOA_PHONE_PATTERNS = [
    re.compile(r"^\+225\d{10}$"),  # Cote d'Ivoire
    re.compile(r"^\+221\d{9}$"),  # Senegal
    re.compile(r"^\+223\d{8}$"),  # Mali
    re.compile(r"^\+226\d{8}$"),  # Burkina Faso
    re.compile(r"^\+229\d{8}$"),  # Benin
    re.compile(r"^\+228\d{8}$"),  # Togo
    re.compile(r"^\+227\d{8}$"),  # Niger
    re.compile(r"^\+245\d{7}$"),  # Guinea-Bissau
]

_NON_DIAL_CHARS = re.compile(r"[^\d+]")

# (minimum score, grade), highest first.
_GRADE_THRESHOLDS = [
    (800, "A+"),
    (750, "A"),
    (700, "B+"),
    (650, "B"),
    (600, "C+"),
    (550, "C"),
    (450, "D"),
]

_RISK_THRESHOLDS = [
    (750, "very_low"),
    (650, "low"),
    (550, "medium"),
    (450, "high"),
]


def _clean(phone: str) -> str:
    return _NON_DIAL_CHARS.sub("", phone)


def format_phone_number(phone: str, default_country: str = "CI") -> str:
    """Normalize a phone number to international format.

    Numbers already starting with ``+`` are returned cleaned. Otherwise a
    leading trunk ``0`` is dropped and the country prefix is prepended
    (unknown countries fall back to Cote d'Ivoire).
    """
    cleaned = _clean(phone)
    if cleaned.startswith("+"):
        return cleaned
    if cleaned.startswith("0"):
        cleaned = cleaned[1:]
    prefix = UEMOA_PREFIXES.get(default_country, UEMOA_PREFIXES["CI"])
    return f"{prefix}{cleaned}"


def is_valid_uemoa_phone(phone: str) -> bool:
    cleaned = _clean(phone)
    return any(pattern.match(cleaned) for pattern in _UEMOA_PHONE_PATTERNS)


def detect_country_from_phone(phone: str) -> str | None:
    """Return the UEMOA country code for an international number, if any."""
    cleaned = _clean(phone)
    for country, prefix in UEMOA_PREFIXES.items():
        if cleaned.startswith(prefix):
            return country
    return None


def score_to_grade(score: int) -> str:
    """Map a 300-850 credit score to its letter grade (A+ to E)."""
    for threshold, grade in _GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "E"


def score_to_risk_category(score: int) -> str:
    for threshold, category in _RISK_THRESHOLDS:
        if score >= threshold:
            return category
    return "very_high"


def mask_phone(phone: str) -> str:
    """Keep the first 6 and last 2 characters, mask the rest."""
    if len(phone) < 8:
        return phone
    return f"{phone[:6]}{'*' * (len(phone) - 8)}{phone[-2:]}"


def mask_national_id(national_id: str) -> str:
    """Keep the first 2 and last 2 characters, mask the rest."""
    if len(national_id) < 6:
        return national_id
    return f"{national_id[:2]}{'*' * (len(national_id) - 4)}{national_id[-2:]}"
