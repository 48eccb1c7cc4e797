from fastapi import APIRouter, Depends, HTTPException, status
from app.core.auth import create_access_token, get_current_user
from app.core.security import verify_password
from app.db.mongo import get_db
from app.models.user import UserResponse
from app.repositories.user_repo import UserRepository
from app.schemas.auth import UserLogin, TokenResponse

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(credentials: UserLogin, db = Depends(get_db)):
    """Login with username and password."""
    user_repo = UserRepository(db)

    user = await user_repo.get_user_by_username(credentials.username)
    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password"
        )

    access_token = create_access_token(str(user.id), user.role.value)
    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=user.to_response()
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user)):
    """Get current user details."""
    return current_user
