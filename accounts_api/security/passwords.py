from typing import Optional, Tuple

from passlib.context import CryptContext


# Hashes made under an older scheme or round count are flagged as needing an
# update and get replaced the next time their owner signs in.
_password_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__min_rounds=29000,
)


def hash_password(plain_password: str) -> str:
    return _password_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return _password_context.verify(plain_password, hashed_password)
    except ValueError:
        # unrecognised or corrupt hash in the row
        return False


def verify_and_rehash(plain_password: str, hashed_password: str) -> Tuple[bool, Optional[str]]:
    """Return ``(matches, new_hash)``; ``new_hash`` is None unless the stored hash is outdated."""
    try:
        return _password_context.verify_and_update(plain_password, hashed_password)
    except ValueError:
        return False, None
