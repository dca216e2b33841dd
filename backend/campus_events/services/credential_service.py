"""Credential store — bcrypt password hashes kept beside the account rows.

The store writes into the caller's session and never commits, so setting a
credential joins whatever transaction the caller is running.
"""
import logging
import secrets
from typing import Optional

import bcrypt
from sqlalchemy.orm import Session

from campus_events.config import settings
from campus_events.models.account import Credential

logger = logging.getLogger(__name__)

# No 0/O, 1/l/I.
TEMP_PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz23456789!@#$%"
MIN_TEMP_PASSWORD_LENGTH = 12
BCRYPT_MAX_BYTES = 72


def generate_temporary_password(length: Optional[int] = None) -> str:
    """Return a one-time password drawn from ``TEMP_PASSWORD_ALPHABET`` with ``secrets``."""
    length = max(length or settings.TEMP_PASSWORD_LENGTH, MIN_TEMP_PASSWORD_LENGTH)
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))


def hash_password(password: str) -> str:
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        raise ValueError("Password cannot be longer than 72 bytes")
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed hash or over-long candidate
        return False


class CredentialStore:
    """Database-backed credential collaborator."""

    # Writes join the caller's transaction.
    transactional = True

    def set_credential(self, db: Session, account_id: str, new_credential: str) -> None:
        password_hash = hash_password(new_credential)
        credential = db.get(Credential, account_id)
        if credential is None:
            db.add(Credential(account_id=account_id, password_hash=password_hash))
        else:
            credential.password_hash = password_hash
        logger.info("Credential staged for account %s", account_id)

    def verify_credential(self, db: Session, account_id: str, candidate: str) -> bool:
        credential = db.get(Credential, account_id)
        if credential is None:
            return False
        return verify_password(candidate, credential.password_hash)


credential_store = CredentialStore()


def get_credential_store() -> CredentialStore:
    """FastAPI dependency — overridable in tests."""
    return credential_store
