# backend/farmrec/services/validation_service.py
"""
Form validation for farmer records and user accounts.

Every rule is checked and every failure is reported, in a fixed order, so a
form can show all of its problems at once. Malformed input is returned as
data; nothing here raises for bad user input.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import List, Optional
import math
import re

from farmrec.core.roles import VALID_ROLES
from farmrec.schemas.farmer import FarmerCreate
from farmrec.services.harvest_status_service import is_iso_date, parse_harvest_date

CONTACT_NUMBER_RE = re.compile(r"^[0-9 \-+()]+$")
USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=list(errors))


def _get(data, key: str):
    if isinstance(data, Mapping):
        return data.get(key)
    return getattr(data, key, None)


def _text(data, key: str) -> str:
    value = _get(data, key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _provided(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _parse_land_area(value) -> Optional[float]:
    """Non-negative finite number, or None when it is not one."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


# -----------------------
# Farmer
# -----------------------
def validate_farmer_data(data) -> ValidationResult:
    errors: List[str] = []

    # Required fields
    if not _text(data, "first_name").strip():
        errors.append("First name is required")
    if not _text(data, "last_name").strip():
        errors.append("Last name is required")
    if not _text(data, "barangay").strip():
        errors.append("Barangay is required")
    if not _text(data, "town").strip():
        errors.append("Town is required")

    contact = _text(data, "contact_number")
    if contact and not CONTACT_NUMBER_RE.match(contact):
        errors.append("Invalid contact number format")

    land_area = _get(data, "land_area")
    if _provided(land_area) and _parse_land_area(land_area) is None:
        errors.append("Land area must be a positive number")

    planted = _text(data, "planted_date").strip()
    harvest = _text(data, "harvest_date").strip()
    planted_ok = bool(planted) and is_iso_date(planted)
    harvest_ok = bool(harvest) and is_iso_date(harvest)

    if planted and not planted_ok:
        errors.append("Invalid planted date format (use YYYY-MM-DD)")
    if harvest and not harvest_ok:
        errors.append("Invalid harvest date format (use YYYY-MM-DD)")

    if planted_ok and harvest_ok and parse_harvest_date(harvest) <= parse_harvest_date(planted):
        errors.append("Harvest date must be after planted date")

    return ValidationResult.from_errors(errors)


def clean_farmer_data(data) -> FarmerCreate:
    """Convert an already-validated form into storable values."""
    land_area = _get(data, "land_area")
    middle = _text(data, "middle_initial").strip()
    return FarmerCreate(
        first_name=_text(data, "first_name").strip(),
        last_name=_text(data, "last_name").strip(),
        middle_initial=middle or None,
        location_group=_text(data, "location_group").strip(),
        barangay=_text(data, "barangay").strip(),
        town=_text(data, "town").strip(),
        contact_number=_text(data, "contact_number").strip(),
        land_area=_parse_land_area(land_area) if _provided(land_area) else None,
        planted_date=parse_harvest_date(_text(data, "planted_date")),
        harvest_date=parse_harvest_date(_text(data, "harvest_date")),
    )


# -----------------------
# User accounts
# -----------------------
def _username_errors(username: str) -> List[str]:
    trimmed = username.strip()
    if not trimmed:
        return ["Username is required"]
    if len(trimmed) < MIN_USERNAME_LENGTH:
        return [f"Username must be at least {MIN_USERNAME_LENGTH} characters"]
    if not USERNAME_RE.match(username):
        return ["Username can only contain letters, numbers, and underscores"]
    return []


def validate_user_data(data, is_editing: bool = False) -> ValidationResult:
    errors = _username_errors(_text(data, "username"))

    # Password is required for new accounts, optional on edit
    password = _text(data, "password")
    if not is_editing and not password:
        errors.append("Password is required")
    elif password and len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if _text(data, "role") not in VALID_ROLES:
        errors.append("Invalid role selected")

    return ValidationResult.from_errors(errors)


def validate_signup_data(data) -> ValidationResult:
    errors = _username_errors(_text(data, "username"))

    password = _text(data, "password")
    if not password:
        errors.append("Password is required")
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if password and password != _text(data, "confirm_password"):
        errors.append("Passwords do not match")

    return ValidationResult.from_errors(errors)
