"""
Email normalization.

Emails in request bodies are validated with pydantic's ``EmailStr``, which
stores the address in email-validator's normalized form (the domain is
lower-cased). Emails arriving in query strings or token claims go through
the same normalization before they are compared or used as filters.
"""

from typing import Optional

from email_validator import EmailNotValidError, validate_email


def normalize_email(email: Optional[str]) -> Optional[str]:
    """
    Return ``email`` in the form ``EmailStr`` stores.

    Values that are not valid addresses are returned stripped but otherwise
    unchanged; they cannot match a stored address anyway.
    """
    if email is None:
        return None
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError:
        return email.strip()
