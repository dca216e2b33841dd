"""Account approval workflow.

Approval flips ``is_approved`` with a conditional update and stages the new
credential in the same transaction, so nobody can observe an approved account
still holding its signup password, and two admins approving at once cannot
both succeed. The notice goes out only after that commit and can fail without
undoing anything.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_events.database import commit_or_raise
from campus_events.errors import Conflict, PartialApprovalFailure, StorageUnavailable
from campus_events.models.account import Account, Role
from campus_events.services.credential_service import (
    CredentialStore, credential_store, generate_temporary_password,
)
from campus_events.services.directory_service import get_account, require_role
from campus_events.services.notification_service import SmtpNotifier

logger = logging.getLogger(__name__)


@dataclass
class ApprovalResult:
    account: Account
    notified: bool
    # Handed back only when the notice failed; it cannot be recovered later.
    temporary_password: Optional[str] = None


def _pending_only(db: Session, target_id: str):
    return db.query(Account).filter(
        Account.account_id == target_id,
        Account.is_approved.is_(False),
    )


def approve_account(
    db: Session,
    admin_id: str,
    target_id: str,
    notifier: SmtpNotifier,
    credentials: CredentialStore = credential_store,
) -> ApprovalResult:
    require_role(db, admin_id, Role.admin)
    get_account(db, target_id)

    flipped = _pending_only(db, target_id).update(
        {Account.is_approved: True}, synchronize_session=False,
    )
    if flipped != 1:
        db.rollback()
        raise Conflict("Account is already approved")

    temporary_password = generate_temporary_password()
    try:
        credentials.set_credential(db, target_id, temporary_password)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Could not set credential for account %s: %s", target_id, exc)
        raise StorageUnavailable() from exc

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Approval of account %s failed to commit: %s", target_id, exc)
        if not credentials.transactional:
            raise PartialApprovalFailure() from exc
        raise StorageUnavailable() from exc

    db.expire_all()
    account = get_account(db, target_id)
    logger.info("Account %s approved by admin %s", target_id, admin_id)

    try:
        notified = notifier.send_approval_notice(account.email, account.full_name, temporary_password)
    except Exception:
        logger.exception("Approval notice for account %s raised", target_id)
        notified = False

    if not notified:
        logger.warning(
            "Account %s approved but not notified; credential must be passed on out-of-band",
            target_id,
        )
        return ApprovalResult(account=account, notified=False, temporary_password=temporary_password)
    return ApprovalResult(account=account, notified=True)


def reject_account(db: Session, admin_id: str, target_id: str) -> None:
    """Delete a pending account outright, with its role and credential."""
    require_role(db, admin_id, Role.admin)
    get_account(db, target_id)

    deleted = _pending_only(db, target_id).delete(synchronize_session=False)
    if deleted != 1:
        db.rollback()
        raise Conflict("Only pending accounts can be rejected")
    commit_or_raise(db)
    db.expire_all()
    logger.info("Account %s rejected and deleted by admin %s", target_id, admin_id)


def list_pending(db: Session, admin_id: str) -> list[Account]:
    require_role(db, admin_id, Role.admin)
    return (
        db.query(Account)
        .filter(Account.is_approved.is_(False))
        .order_by(Account.created_at.desc())
        .all()
    )
