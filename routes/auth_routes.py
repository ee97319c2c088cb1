from fastapi import APIRouter, Depends, status

from models.user_model import LoginRequest, LoginResponse, MeResponse, MessageResponse, RegisterRequest
from services import account_service
from services.auth_service import Identity, get_current_identity, get_token_codec
from services.errors import NotFound
from services.token_service import TokenCodec
from services.user_store import UserStore, get_user_store

router = APIRouter(prefix="/api", tags=["Auth"])

# Handlers are plain functions: FastAPI runs them in its threadpool, which
# keeps bcrypt and pymongo calls off the event loop.

# --- REGISTER ---
@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
def register(body: RegisterRequest, store: UserStore = Depends(get_user_store)):
    account_service.register_account(
        store,
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
        school_id=body.schoolId,
    )
    return {"message": "Registration successful"}

# --- LOGIN ---
@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    store: UserStore = Depends(get_user_store),
    codec: TokenCodec = Depends(get_token_codec),
):
    return account_service.login(store, codec, body.email, body.password, body.role)

# --- CURRENT USER ---
@router.get("/me", response_model=MeResponse)
def me(
    identity: Identity = Depends(get_current_identity),
    store: UserStore = Depends(get_user_store),
):
    account = store.find_by_id(identity.id)
    if account is None:
        raise NotFound("User not found")

    return MeResponse(
        id=account.id,
        name=account.name,
        email=account.email,
        role=account.role,
        schoolId=account.school_id,
        preparednessScore=account.preparedness_score,
        drillsCompleted=account.drills_completed,
        completedDrills=account.completed_drills,
    )
