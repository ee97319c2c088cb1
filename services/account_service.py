# services/account_service.py
import logging
from typing import Dict, Optional

from passlib.context import CryptContext

from config.settings import settings
from models.account import Account, ROLES, ROLE_ADMIN
from services.errors import Conflict, InvalidCredentials, ValidationFailed
from services.token_service import TokenClaims, TokenCodec
from services.user_store import UserStore

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _require(*values: Optional[str]) -> None:
    if any(value is None or not str(value).strip() for value in values):
        raise ValidationFailed("Missing required fields")


def register_account(
    store: UserStore,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    role: Optional[str],
    school_id: Optional[str],
) -> Account:
    """
    Create a new account with an empty drill history.

    Emails are unique per role, and each school may have a single admin.
    """
    _require(name, email, password, role, school_id)
    if role not in ROLES:
        raise ValidationFailed("Invalid role")

    email = normalize_email(email)
    school_id = school_id.strip()

    if store.exists_by_email_and_role(email, role):
        raise Conflict("Email already registered")

    if role == ROLE_ADMIN and store.find_by_role_and_school(ROLE_ADMIN, school_id):
        raise Conflict("An admin already exists for this school")

    account = Account(
        name=name.strip(),
        email=email,
        password_hash=pwd_context.hash(password),
        role=role,
        school_id=school_id,
    )
    account = store.save(account)
    logger.info("Registered %s account %s for school %s", role, account.id, school_id)
    return account


def login(
    store: UserStore,
    codec: TokenCodec,
    email: Optional[str],
    password: Optional[str],
    role: Optional[str],
) -> Dict[str, Optional[str]]:
    _require(email, password, role)

    account = store.find_by_email_and_role(normalize_email(email), role)
    # Same error either way so callers cannot probe which emails exist
    if account is None or not pwd_context.verify(password, account.password_hash):
        logger.info("Failed login for role %s", role)
        raise InvalidCredentials("Invalid credentials")

    token = codec.issue(TokenClaims(subject=account.id, role=account.role, schoolId=account.school_id))
    return {
        "token": token,
        "role": account.role,
        "schoolId": account.school_id,
        "message": "Login successful",
    }
