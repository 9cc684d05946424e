"""Password hashing and signed access tokens."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, SECRET_KEY
from errors import InvalidTokenError
from models import RoleEnum

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class Identity:
    """Who is making the request, as asserted by a verified token."""
    user_id: str
    role: RoleEnum

    @property
    def is_admin(self) -> bool:
        return self.role == RoleEnum.admin


def hash_password(password: str):
    """bcrypt hash of ``password``"""
    return pwd_context.hash(password)


def verify_password(plain_password, hashed_password):
    """True when ``plain_password`` matches the stored bcrypt hash"""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id, role, expires_delta: timedelta | None = None) -> str:
    """Sign a token carrying the user id and role.

    The token expires ``ACCESS_TOKEN_EXPIRE_MINUTES`` after issue unless
    ``expires_delta`` says otherwise. Nothing is stored server side.
    """
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    claims = {
        "userId": str(user_id),
        "role": RoleEnum(role).value,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Identity:
    """Verify signature and expiry and return the identity the token carries.

    Raises InvalidTokenError for bad signatures, expired or malformed tokens,
    and tokens whose claims do not name a user and a known role.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise InvalidTokenError() from exc

    user_id, role = payload.get("userId"), payload.get("role")
    if not user_id or role not in {r.value for r in RoleEnum}:
        raise InvalidTokenError()
    return Identity(user_id=str(user_id), role=RoleEnum(role))
