# threadly/routes/user_routes.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from threadly.actions.user_actions import update_user
from threadly.database import get_async_session
from threadly.deps.identity import get_current_identity
from threadly.errors import UsernameTaken
from threadly.models.user_model import User
from threadly.schemas.user_schemas import UpdateUserIn, UserOut

router = APIRouter(tags=["users"])


@router.put("/profile", response_model=UserOut)
async def save_profile(
    payload: UpdateUserIn,
    identity: str = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
):
    """Onboarding and profile edits both land here; `path` says which page sent it."""
    username_norm = payload.username.strip().lower()

    taken = (
        await db.execute(
            select(User.id).where(User.username == username_norm, User.external_id != identity)
        )
    ).scalars().first()
    if taken is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")

    try:
        user = await update_user(
            db,
            identity,
            username=payload.username,
            name=payload.name,
            bio=payload.bio,
            image=payload.image,
            path=payload.path,
        )
    except UsernameTaken:
        # lost a race with another signup between the check and the write
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")
    return UserOut.from_user(user)
