"""
Password hashing

Credentials are hashed with bcrypt (cost factor 12). Verification goes
through bcrypt.checkpw, which compares in constant time. bcrypt only reads
the first 72 bytes of its input and rejects anything longer, so callers
check password_fits_bcrypt before hashing.
"""

import bcrypt

BCRYPT_ROUNDS = 12
BCRYPT_MAX_BYTES = 72


def password_fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= BCRYPT_MAX_BYTES


def hash_password(password: str) -> str:
    if not password_fits_bcrypt(password):
        raise ValueError(f"Password exceeds {BCRYPT_MAX_BYTES} bytes")
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(BCRYPT_ROUNDS)).decode(
        "utf-8"
    )


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    if not password_fits_bcrypt(password):
        # Nothing longer than the limit can ever have been stored
        burn_verification_time(password)
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def burn_verification_time(password: str) -> None:
    """Run a throwaway bcrypt check so unknown-email logins cost the same as real ones."""
    candidate = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    bcrypt.checkpw(candidate, bcrypt.gensalt(BCRYPT_ROUNDS))
