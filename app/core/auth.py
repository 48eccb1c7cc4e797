from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer
from app.core.config import settings
from app.db.mongo import get_db
from app.repositories.user_repo import UserRepository
from app.models.user import UserResponse, UserRole

security = HTTPBearer()

def create_access_token(user_id: str, role: str, expires_delta: timedelta | None = None) -> str:
    """Create JWT access token."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(timezone.utc)
    expire = now + expires_delta

    payload = {
        "sub": user_id,
        "role": role,
        "exp": int(expire.timestamp()),
        "iat": int(now.timestamp())
    }

    return jwt.encode(
        payload,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )

def decode_access_token(token: str) -> str | None:
    """Return the user id carried by a valid token, None otherwise."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None
    return payload.get("sub")

async def user_from_token(token: str, db) -> UserResponse | None:
    """Resolve a token to an active (not soft-deleted) user."""
    user_id = decode_access_token(token)
    if user_id is None:
        return None
    user = await UserRepository(db).get_user_by_id(user_id)
    if user is None:
        return None
    return user.to_response()

async def get_current_user(
    credentials = Depends(security),
    db = Depends(get_db)
) -> UserResponse:
    """Get current user from JWT token."""
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )

    user_repo = UserRepository(db)
    user = await user_repo.get_user_by_id(user_id)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    return user.to_response()

def require_roles(*roles: UserRole):
    """Dependency factory: allow only users with one of the given roles."""
    async def checker(current_user: UserResponse = Depends(get_current_user)) -> UserResponse:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions"
            )
        return current_user
    return checker

require_staff_editor = require_roles(UserRole.ADMIN, UserRole.RECEPTIONIST)
require_admin = require_roles(UserRole.ADMIN)
