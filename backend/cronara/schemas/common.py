"""Shared schema helpers."""

from typing import Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
import phonenumbers

from cronara.config import get_settings

settings = get_settings()


class CamelModel(BaseModel):
    """Base schema exchanging camelCase field names with the web client."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim whitespace. Blank strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_phone(value: Optional[str]) -> Optional[str]:
    """
    Normalize a phone number to E.164 when it parses as a valid number
    for the default region. Anything else is kept as typed.
    """
    value = clean_text(value)
    if value is None:
        return None
    try:
        parsed = phonenumbers.parse(value, settings.DEFAULT_PHONE_REGION)
    except phonenumbers.NumberParseException:
        return value
    if not phonenumbers.is_valid_number(parsed):
        return value
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def count_digits(value: str) -> int:
    return sum(ch.isdigit() for ch in value)
