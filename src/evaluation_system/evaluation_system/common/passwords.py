from __future__ import annotations

import hmac

from werkzeug.security import check_password_hash

_HASH_PREFIXES = ("pbkdf2:", "scrypt:")


def is_password_hash(stored: str) -> bool:
    return isinstance(stored, str) and stored.startswith(_HASH_PREFIXES)


def verify_password(stored: str | None, candidate: str | None) -> bool:
    """Compare a typed password with the stored one.

    Fixture accounts carry plaintext passwords; accounts created through the
    app may carry werkzeug hashes.
    """
    if not stored or candidate is None:
        return False

    if is_password_hash(stored):
        try:
            return check_password_hash(stored, candidate)
        except ValueError:
            return False

    return hmac.compare_digest(str(stored).encode("utf-8"), str(candidate).encode("utf-8"))
