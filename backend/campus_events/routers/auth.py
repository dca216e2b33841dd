"""Signup and sign-in routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.dependencies import get_principal
from campus_events.models.account import Account
from campus_events.schemas.account import AccountOut, LoginRequest, SignupRequest
from campus_events.services import directory_service
from campus_events.services.credential_service import CredentialStore, get_credential_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/signup", response_model=AccountOut, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    db: Session = Depends(get_db),
    credentials: CredentialStore = Depends(get_credential_store),
):
    """Create an account awaiting admin approval."""
    return directory_service.signup(
        db=db,
        full_name=payload.full_name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        department=payload.department,
        credentials=credentials,
    )


@router.post("/login", response_model=AccountOut)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    credentials: CredentialStore = Depends(get_credential_store),
):
    """Verify credentials. Pending accounts are refused before the password is checked."""
    return directory_service.authenticate(db, payload.email, payload.password, credentials)


@router.get("/me", response_model=AccountOut)
def me(principal: Account = Depends(get_principal)):
    return principal
