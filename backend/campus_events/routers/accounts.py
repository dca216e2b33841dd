"""Account administration routes — approval queue and role management."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.dependencies import get_principal
from campus_events.models.account import Account
from campus_events.schemas.account import AccountOut, ApprovalOut, RoleUpdate
from campus_events.services import approval_service, directory_service
from campus_events.services.credential_service import CredentialStore, get_credential_store
from campus_events.services.notification_service import SmtpNotifier, get_notifier

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[AccountOut])
def list_accounts(db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    """List every account with its role (admin only)."""
    return directory_service.list_accounts(db, principal.account_id)


@router.get("/pending", response_model=list[AccountOut])
def list_pending(db: Session = Depends(get_db), principal: Account = Depends(get_principal)):
    """Accounts awaiting approval, newest first, with their requested role."""
    return approval_service.list_pending(db, principal.account_id)


@router.post("/{account_id}/approve", response_model=ApprovalOut)
def approve_account(
    account_id: str,
    db: Session = Depends(get_db),
    principal: Account = Depends(get_principal),
    notifier: SmtpNotifier = Depends(get_notifier),
    credentials: CredentialStore = Depends(get_credential_store),
):
    """Approve a pending account and send it a one-time password.

    If the notice cannot be delivered the password is returned in the response
    so it can be passed on by other means.
    """
    result = approval_service.approve_account(
        db, principal.account_id, account_id, notifier, credentials,
    )
    return ApprovalOut(
        account=AccountOut.model_validate(result.account),
        notified=result.notified,
        temporary_password=result.temporary_password,
    )


@router.post("/{account_id}/reject", status_code=status.HTTP_204_NO_CONTENT)
def reject_account(
    account_id: str,
    db: Session = Depends(get_db),
    principal: Account = Depends(get_principal),
):
    """Delete a pending account. Irreversible."""
    approval_service.reject_account(db, principal.account_id, account_id)


@router.put("/{account_id}/role", response_model=AccountOut)
def reassign_role(
    account_id: str,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    principal: Account = Depends(get_principal),
):
    """Replace an account's role (admin only)."""
    return directory_service.reassign_role(db, principal.account_id, account_id, payload.role)
