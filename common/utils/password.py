"""
Password validation and bcrypt hashing.

The users table keeps a legacy bcrypt hash next to the identity provider's
own credentials, so hashes must stay compatible with the ones written by the
previous Node backend (``$2b$`` with 10 rounds).

Example:
    from common.utils import validate_password, hash_password, verify_password

    is_valid, errors = validate_password("corta")
    if not is_valid:
        print(errors)

    hashed = hash_password("una-clave-larga")
    assert verify_password("una-clave-larga", hashed)
"""

import re
from typing import List, Tuple

import bcrypt

BCRYPT_ROUNDS = 10


def validate_password(
    password: str,
    min_length: int = 8,
    max_length: int = 128,
    require_uppercase: bool = False,
    require_lowercase: bool = False,
    require_digit: bool = False,
) -> Tuple[bool, List[str]]:
    """
    Validate password strength.

    Args:
        password: The password to validate
        min_length: Minimum password length
        max_length: Maximum password length
        require_uppercase: Require at least one uppercase letter
        require_lowercase: Require at least one lowercase letter
        require_digit: Require at least one digit

    Returns:
        Tuple of (is_valid: bool, errors: List[str])
    """
    errors: List[str] = []

    if len(password) < min_length:
        errors.append(f"La contraseña debe tener al menos {min_length} caracteres")

    if len(password) > max_length:
        errors.append(f"La contraseña no puede superar los {max_length} caracteres")

    if require_uppercase and not re.search(r"[A-Z]", password):
        errors.append("La contraseña debe incluir al menos una mayúscula")

    if require_lowercase and not re.search(r"[a-z]", password):
        errors.append("La contraseña debe incluir al menos una minúscula")

    if require_digit and not re.search(r"\d", password):
        errors.append("La contraseña debe incluir al menos un número")

    return len(errors) == 0, errors


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """
    Check a password against a stored bcrypt hash.

    Malformed hashes and passwords bcrypt refuses (over 72 bytes) are
    treated as a mismatch.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False
