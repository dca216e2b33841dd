"""Request dependencies resolving the acting principal."""
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.errors import AccountPendingApproval
from campus_events.models.account import Account


def get_principal(
    x_account_id: Optional[str] = Header(None, description="Authenticated account making the request"),
    db: Session = Depends(get_db),
) -> Account:
    """Resolve the caller's account. Unapproved accounts may not act."""
    if not x_account_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Account-Id header",
        )
    account = db.get(Account, x_account_id)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown account",
        )
    if not account.is_approved:
        raise AccountPendingApproval()
    return account
