from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict

from config.settings import settings
from services.errors import Forbidden, InvalidToken, Unauthorized
from services.token_service import TokenCodec

bearer_scheme = HTTPBearer(auto_error=False)


class Identity(BaseModel):
    """Who is calling; produced by the guard and passed to handlers."""
    model_config = ConfigDict(frozen=True)

    id: str
    role: str
    schoolId: Optional[str] = None


@lru_cache(maxsize=1)
def get_token_codec() -> TokenCodec:
    return TokenCodec(
        settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    codec: TokenCodec = Depends(get_token_codec),
) -> Identity:
    if credentials is None:
        # HTTPBearer yields None both for a missing header and a non-bearer one
        if request.headers.get("Authorization"):
            raise Unauthorized("Invalid token")
        raise Unauthorized("No token provided")

    try:
        claims = codec.verify(credentials.credentials)
    except InvalidToken as exc:
        raise Unauthorized("Invalid token") from exc

    return Identity(id=claims.subject, role=claims.role, schoolId=claims.schoolId)


def require_role(role: str):
    async def _require_role(identity: Optional[Identity] = Depends(get_current_identity)) -> Identity:
        if identity is None:
            raise Unauthorized("Not authenticated")
        if identity.role != role:
            raise Forbidden(f"{role.capitalize()} access required")
        return identity

    return _require_role
