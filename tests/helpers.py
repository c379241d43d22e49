from datetime import datetime, timedelta, timezone

from threadly.utils.token_utils import create_identity_token

BASE_TIME = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


def auth_headers(external_id: str) -> dict:
    return {"Authorization": f"Bearer {create_identity_token(external_id)}"}
