from datetime import datetime, timedelta, timezone
import jwt
from typing import Optional, Protocol


class IdentityVerifier(Protocol):
    def verify(self, token: str) -> Optional[str]:
        """Return the verified principal email, or None if the token is not acceptable."""
        ...


class JWTIdentityVerifier:
    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def verify(self, token: str) -> Optional[str]:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError:
            return None
        return payload.get("email") or payload.get("sub")


def create_access_token(email: str, secret: str, algorithm: str = "HS256", expires_minutes: int = 60) -> str:
    now = datetime.now(timezone.utc)
    payload = {"sub": email, "email": email, "iat": now, "exp": now + timedelta(minutes=expires_minutes)}
    return jwt.encode(payload, secret, algorithm=algorithm)
