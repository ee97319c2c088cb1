# routes/student_routes.py

from fastapi import APIRouter, Depends

from models.account import ROLE_ADMIN, ROLE_STUDENT
from models.drill_models import DrillCompletionResponse, DrillHistoryResponse, DrillSubmission, ProgressOverride
from models.user_model import AccountSummary, DashboardResponse, DrillEntry
from services import drill_service
from services.auth_service import Identity, get_current_identity
from services.errors import Forbidden, NotFound
from services.user_store import UserStore, get_user_store

router = APIRouter(prefix="/api", tags=["Students"])


@router.post("/students/complete-drill", response_model=DrillCompletionResponse)
def complete_drill(
    body: DrillSubmission,
    identity: Identity = Depends(get_current_identity),
    store: UserStore = Depends(get_user_store),
):
    account = drill_service.submit_drill(store, identity.id, body.drillName, body.score)
    return DrillCompletionResponse(
        drillsCompleted=account.drills_completed,
        preparednessScore=account.preparedness_score,
        completedDrills=account.completed_drills,
    )


@router.post("/students/update", response_model=AccountSummary)
def update_progress(
    body: ProgressOverride,
    identity: Identity = Depends(get_current_identity),
    store: UserStore = Depends(get_user_store),
):
    """Directly overwrite preparednessScore / drillsCompleted without recomputing them."""
    account = drill_service.override_progress(
        store,
        identity.id,
        preparedness_score=body.preparednessScore,
        drills_completed=body.drillsCompleted,
    )
    return AccountSummary.from_account(account)


@router.get("/student/dashboard", response_model=DashboardResponse)
def dashboard(
    identity: Identity = Depends(get_current_identity),
    store: UserStore = Depends(get_user_store),
):
    account = store.find_by_id(identity.id)
    if account is None or account.role != ROLE_STUDENT:
        raise NotFound("Student not found or unauthorized")

    return DashboardResponse(
        name=account.name,
        email=account.email,
        preparednessScore=account.preparedness_score,
        drillsCompleted=account.drills_completed,
    )


@router.get("/drills/{student_id}", response_model=DrillHistoryResponse)
def drill_history(
    student_id: str,
    identity: Identity = Depends(get_current_identity),
    store: UserStore = Depends(get_user_store),
):
    # Students see their own history; admins see students of their school.
    is_self = identity.id == student_id
    if not is_self and identity.role != ROLE_ADMIN:
        raise Forbidden("Access denied")

    account = store.find_by_id(student_id)
    if account is None or account.role != ROLE_STUDENT:
        raise NotFound("Student not found")
    if not is_self and account.school_id != identity.schoolId:
        raise Forbidden("Access denied")

    return DrillHistoryResponse(
        studentId=account.id,
        drills=[DrillEntry(drillName=d.drill_name, score=d.score) for d in account.drills],
        drillsCompleted=account.drills_completed,
        preparednessScore=account.preparedness_score,
    )
