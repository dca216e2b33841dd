"""Role & account directory — the authority every other service consults.

- One role per account, enforced by the ``account_roles`` primary key
- Role lookups fail closed: no role row means no authority
- Unapproved accounts are refused before their password is checked
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from campus_events.database import commit_or_raise
from campus_events.errors import (
    AccountPendingApproval, Conflict, Forbidden, InvalidCredentials, NotFound, StorageUnavailable,
)
from campus_events.models.account import Account, Role, RoleAssignment
from campus_events.services.credential_service import CredentialStore, credential_store

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_account(db: Session, account_id: str) -> Account:
    account = db.get(Account, account_id)
    if account is None:
        raise NotFound("Account not found")
    return account


def find_by_email(db: Session, email: str) -> Optional[Account]:
    return db.query(Account).filter(Account.email == normalize_email(email)).first()


def resolve_role(db: Session, account_id: str) -> Optional[Role]:
    assignment = db.get(RoleAssignment, account_id)
    return assignment.role if assignment else None


def is_approved(db: Session, account_id: str) -> bool:
    account = db.get(Account, account_id)
    return bool(account and account.is_approved)


def require_role(db: Session, actor_id: str, *roles: Role) -> Role:
    """Return the actor's role, raising ``Forbidden`` unless it is one of ``roles``.

    An account still awaiting approval holds its requested role but may not use it.
    """
    account = db.get(Account, actor_id)
    if account is not None and not account.is_approved:
        raise AccountPendingApproval()
    role = resolve_role(db, actor_id)
    if role is None or (roles and role not in roles):
        raise Forbidden()
    return role


def authenticate(
    db: Session,
    email: str,
    password: str,
    credentials: CredentialStore = credential_store,
) -> Account:
    account = find_by_email(db, email)
    if account is None:
        raise InvalidCredentials()

    # Checked before the password so an unapproved account never learns whether it was right.
    if not account.is_approved:
        raise AccountPendingApproval()

    if not credentials.verify_credential(db, account.account_id, password):
        logger.info("Failed sign-in for account %s", account.account_id)
        raise InvalidCredentials()

    logger.info("Account %s signed in", account.account_id)
    return account


def signup(
    db: Session,
    full_name: str,
    email: str,
    password: str,
    role: Role,
    department: Optional[str] = None,
    credentials: CredentialStore = credential_store,
) -> Account:
    """Create an unapproved account holding its requested role and initial credential."""
    email = normalize_email(email)
    if find_by_email(db, email) is not None:
        raise Conflict("An account with this email already exists")

    account = Account(
        full_name=full_name.strip(),
        email=email,
        department=department or None,
        is_approved=False,
    )
    db.add(account)
    db.flush()
    db.add(RoleAssignment(account_id=account.account_id, role=role))
    credentials.set_credential(db, account.account_id, password)
    commit_or_raise(db)
    db.refresh(account)
    logger.info("Account %s signed up as %s, pending approval", account.account_id, role.value)
    return account


def reassign_role(db: Session, actor_id: str, target_id: str, new_role: Role) -> Account:
    """Replace the target's role in place.

    The row is updated rather than deleted and re-inserted, so concurrent readers
    always see exactly one role. An insert only happens when the account has no
    row yet; losing that insert to a concurrent writer falls back to the update.
    """
    require_role(db, actor_id, Role.admin)
    account = get_account(db, target_id)

    for _ in range(2):
        updated = (
            db.query(RoleAssignment)
            .filter(RoleAssignment.account_id == target_id)
            .update({RoleAssignment.role: new_role}, synchronize_session="fetch")
        )
        if updated == 0:
            db.add(RoleAssignment(account_id=target_id, role=new_role))
        try:
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            logger.info("Concurrent role insert for %s, retrying as update", target_id)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Role update for %s failed: %s", target_id, exc)
            raise StorageUnavailable() from exc
    else:
        raise Conflict("Role could not be assigned, please retry")

    db.refresh(account)
    logger.info("Account %s role set to %s by %s", target_id, new_role.value, actor_id)
    return account


def list_accounts(db: Session, actor_id: str) -> list[Account]:
    require_role(db, actor_id, Role.admin)
    return db.query(Account).order_by(Account.full_name).all()
