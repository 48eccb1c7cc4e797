from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from app.core.auth import require_admin
from app.db.mongo import get_db
from app.models.user import UserCreate, UserResponse
from app.repositories.user_repo import UserRepository

router = APIRouter()


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    current_user: UserResponse = Depends(require_admin),
    db = Depends(get_db)
):
    """Create a staff account (admin only)."""
    user_repo = UserRepository(db)

    existing = await user_repo.get_user_by_username(user_data.username)
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already registered"
        )

    user = await user_repo.create_user(user_data)
    return user.to_response()


@router.get("/", response_model=List[UserResponse])
async def list_users(
    current_user: UserResponse = Depends(require_admin),
    db = Depends(get_db)
):
    """List staff accounts (admin only)."""
    user_repo = UserRepository(db)
    return [user.to_response() for user in await user_repo.list_users()]


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    current_user: UserResponse = Depends(require_admin),
    db = Depends(get_db)
):
    """Deactivate a staff account (admin only). Its tokens stop working."""
    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete your own account"
        )
    user_repo = UserRepository(db)
    if not await user_repo.soft_delete_user(user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
