"""
Input validation utilities for user data.
"""

import re
from typing import Optional


def validate_phone(phone: str) -> bool:
    """
    Validate phone number format.
    Accepts international format with optional + prefix.

    Args:
        phone: Phone number string

    Returns:
        True if valid format, False otherwise
    """
    if not phone or not isinstance(phone, str):
        return False

    # Remove spaces, dashes, parentheses
    cleaned = re.sub(r'[\s\-\(\)]', '', phone)

    return bool(re.fullmatch(r'\+?[1-9]\d{6,14}', cleaned))


def validate_time_string(value: str) -> bool:
    """
    Check that a value is a zero-padded 24-hour HH:MM time.
    """
    if not value or not isinstance(value, str):
        return False
    return bool(re.fullmatch(r'([01]\d|2[0-3]):[0-5]\d', value))


def sanitize_text(text: Optional[str], max_length: Optional[int] = None) -> str:
    """
    Sanitize user input text.

    Args:
        text: Input text
        max_length: Optional maximum length

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    # Remove control characters except newlines and tabs
    sanitized = re.sub(r'[\x00-\x08\x0B-\x0C\x0E-\x1F\x7F]', '', str(text))
    sanitized = sanitized.strip()

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized


def optional_text(text: Optional[str], max_length: Optional[int] = None) -> Optional[str]:
    """Sanitize optional text, turning blank values into None."""
    sanitized = sanitize_text(text, max_length)
    return sanitized or None
