"""PBKDF2-SHA256 password hashing.

Hashes are stored as ``$pbkdf2_sha256$<iterations>$<salt>$<hash>`` with
URL-safe base64 salt and digest.
"""

import base64
import hashlib
import secrets

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 600_000
SALT_BYTES = 16


def hash_password(password: str, iterations: int = ITERATIONS) -> str:
    salt = secrets.token_bytes(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    salt_b64 = base64.urlsafe_b64encode(salt).decode("ascii")
    hash_b64 = base64.urlsafe_b64encode(digest).decode("ascii")
    return f"${ALGORITHM}${iterations}${salt_b64}${hash_b64}"


def verify_password(password_hash: str, password: str) -> bool:
    """Check ``password`` against a stored hash. Malformed hashes never verify."""
    parts = (password_hash or "").split("$")
    if len(parts) != 5 or parts[1] != ALGORITHM:
        return False

    try:
        iterations = int(parts[2])
        salt = base64.urlsafe_b64decode(parts[3])
        expected = base64.urlsafe_b64decode(parts[4])
    except ValueError:
        return False

    computed = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return secrets.compare_digest(computed, expected)
