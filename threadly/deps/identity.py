# threadly/deps/identity.py
from dataclasses import dataclass
from typing import Literal, Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from threadly.actions.user_actions import fetch_user
from threadly.config import ONBOARDING_PATH
from threadly.database import get_async_session
from threadly.errors import NoContent, RedirectRequired
from threadly.models.user_model import User
from threadly.utils.token_utils import decode_identity_token


@dataclass(frozen=True)
class GateOutcome:
    status: Literal["anonymous", "redirect", "authorized"]
    user: Optional[User] = None
    redirect_to: Optional[str] = None


async def get_current_identity_optional(request: Request) -> Optional[str]:
    """Identity-provider subject id from the bearer token, if any."""
    auth = request.headers.get("Authorization")
    if not auth or not auth.lower().startswith("bearer "):
        return None
    token = auth.split(" ", 1)[1].strip()
    return decode_identity_token(token)


async def get_current_identity(
    identity: Optional[str] = Depends(get_current_identity_optional),
) -> str:
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


async def check_onboarded(session: AsyncSession, external_id: Optional[str]) -> GateOutcome:
    """
    Shared precondition of every gated page: someone is signed in, has a
    profile, and finished onboarding.
    """
    if not external_id:
        return GateOutcome(status="anonymous")

    user = await fetch_user(session, external_id)
    if user is None or not user.onboarded:
        return GateOutcome(status="redirect", redirect_to=ONBOARDING_PATH)

    return GateOutcome(status="authorized", user=user)


async def require_onboarded_user(
    identity: Optional[str] = Depends(get_current_identity_optional),
    session: AsyncSession = Depends(get_async_session),
) -> User:
    outcome = await check_onboarded(session, identity)
    if outcome.status == "anonymous":
        raise NoContent()
    if outcome.status == "redirect":
        raise RedirectRequired(outcome.redirect_to)
    return outcome.user
