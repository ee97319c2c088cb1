# services/token_service.py
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from pydantic import BaseModel

from services.errors import InvalidToken

DEFAULT_TTL = timedelta(days=1)


class TokenClaims(BaseModel):
    subject: str
    role: str
    schoolId: Optional[str] = None


class TokenCodec:
    """Signs and verifies the bearer tokens handed out at login."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = DEFAULT_TTL):
        if not secret or not secret.strip():
            raise ValueError("A signing secret is required to issue tokens")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, claims: TokenClaims, ttl: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": claims.subject,
            "role": claims.role,
            "schoolId": claims.schoolId,
            "iat": now,
            "exp": now + (ttl if ttl is not None else self.ttl),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidToken() from exc

        subject = payload.get("sub")
        role = payload.get("role")
        if not subject or not role:
            raise InvalidToken()
        return TokenClaims(subject=subject, role=role, schoolId=payload.get("schoolId"))
