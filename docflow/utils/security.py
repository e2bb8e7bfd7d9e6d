
from dataclasses import dataclass
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt_sha256", "bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


@dataclass(frozen=True)
class Identity:
    id: int
    username: str
    email: str
    role: str


class TokenService:
    """Signs and verifies the bearer tokens handed out at login."""

    def __init__(self, secret_key: str, expires_seconds: int):
        self.secret_key = secret_key
        self.expires_seconds = expires_seconds

    def create_access_token(self, identity: Identity, expires_seconds: int | None = None) -> str:
        now = datetime.now(timezone.utc)
        ttl = self.expires_seconds if expires_seconds is None else expires_seconds
        to_encode = {
            "sub": str(identity.id),
            "username": identity.username,
            "email": identity.email,
            "role": identity.role,
            "iat": now,
            "exp": now + timedelta(seconds=ttl),
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=ALGORITHM)

    def decode_token(self, token: str) -> dict:
        return jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])

    def decode_identity(self, token: str) -> Identity:
        payload = self.decode_token(token)
        return Identity(
            id=int(payload["sub"]),
            username=payload.get("username", ""),
            email=payload.get("email", ""),
            role=payload.get("role", ""),
        )
