# users router: the current (stub) user's public profile

from fastapi import APIRouter, Depends

from app.dependencies import get_current_user
from app.models.user import User, UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    return UserResponse(id=current_user.id, username=current_user.username)
