from typing import List

from fastapi import APIRouter, Depends

from models.account import ROLE_ADMIN, ROLE_STUDENT
from models.user_model import AccountSummary
from services.auth_service import Identity, require_role
from services.errors import ValidationFailed
from services.user_store import UserStore, get_user_store

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/students", response_model=List[AccountSummary])
def list_students(
    identity: Identity = Depends(require_role(ROLE_ADMIN)),
    store: UserStore = Depends(get_user_store),
):
    if not identity.schoolId:
        raise ValidationFailed("Admin has no schoolId")

    students = store.find_by_role_and_school(ROLE_STUDENT, identity.schoolId)
    return [AccountSummary.from_account(s) for s in students]
