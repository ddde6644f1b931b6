"""PIN hashing and verification.

Only the digest of a PIN is stored. The digest is an unsalted SHA-256 hex
string so that documents written by earlier versions keep verifying; two
users with the same PIN share a digest.
"""

import hashlib
import hmac
import re

from installment_tracker.exceptions import ValidationError

_PIN_PATTERN = re.compile(r"[0-9]{4,6}")


def validate_pin_format(pin: str) -> bool:
    """Check that ``pin`` is 4 to 6 digits."""
    return isinstance(pin, str) and _PIN_PATTERN.fullmatch(pin) is not None


def hash_pin(pin: str) -> str:
    """Hash a PIN.

    Parameters
    ----------
    pin : str
        Raw PIN.

    Returns
    -------
    str
        Lowercase hex SHA-256 digest.
    """
    return hashlib.sha256(pin.encode("utf-8")).hexdigest()


def verify_pin(pin: str, stored_hash: str) -> bool:
    """Check a candidate PIN against a stored digest."""
    return hmac.compare_digest(hash_pin(pin), stored_hash)


def new_pin_hash(pin: str, confirmation: str | None = None) -> str:
    """Validate a new PIN (and its confirmation) and return its digest.

    Raises
    ------
    ValidationError
        If the format is wrong or the confirmation differs.
    """
    if not validate_pin_format(pin):
        raise ValidationError("PIN must be 4-6 digits", field="pin")
    if confirmation is not None and confirmation != pin:
        raise ValidationError("PINs do not match", field="pin_confirmation")
    return hash_pin(pin)
