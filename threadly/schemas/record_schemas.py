# threadly/schemas/record_schemas.py
"""
Plain-record shapes of users, communities and threads, read straight off ORM
rows (or mappings) with `from_attributes`.

Ids always come out as `str` (or None); `_id` is the stringified primary key,
`id` on people and communities is the external id.
"""
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, Field, field_validator


def _read(obj: Any, attr: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(attr)
    return getattr(obj, attr, None)


def _as_utc(value: datetime) -> datetime:
    # naive timestamps come back from the database in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: Any) -> Optional[str]:
    """Fixed `YYYY-MM-DDTHH:MM:SS.mmmZ` form, e.g. `2024-03-01T09:30:00.000Z`."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    value = _as_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _str_or_none(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _isoformat(value: Any) -> Optional[str]:
    if isinstance(value, datetime):
        return value.isoformat()
    return _str_or_none(value)


def _external_ids(items: Any) -> List[str]:
    # a bare id is accepted in place of a loaded row
    return [
        str(item if isinstance(item, (str, int)) else _read(item, "external_id"))
        for item in items or []
    ]


StrId = Annotated[Optional[str], BeforeValidator(_str_or_none)]
IsoTime = Annotated[Optional[str], BeforeValidator(_isoformat)]
FixedTime = Annotated[Optional[str], BeforeValidator(format_timestamp)]
ExternalIds = Annotated[List[str], BeforeValidator(_external_ids)]


class AuthorPublicRecord(BaseModel):
    id: StrId = Field(default=None, validation_alias="external_id")
    name: Optional[str] = None
    image: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class AuthorRecord(AuthorPublicRecord):
    pk: StrId = Field(default=None, validation_alias="id", serialization_alias="_id")


class CommunityRecord(BaseModel):
    id: StrId = Field(default=None, validation_alias="external_id")
    name: Optional[str] = None
    image: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class CommentAuthorRecord(BaseModel):
    image: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


# replies shown as an avatar stack only need the author's picture
class CommentPreviewRecord(BaseModel):
    author: Optional[CommentAuthorRecord] = None

    model_config = {
        "from_attributes": True
    }


class ThreadChildRecord(BaseModel):
    pk: StrId = Field(default=None, validation_alias="id", serialization_alias="_id")
    text: Optional[str] = None
    parent_id: StrId = None
    author: Optional[AuthorRecord] = None
    community: Optional[CommunityRecord] = None
    likes: ExternalIds = []
    created_at: IsoTime = None

    model_config = {
        "from_attributes": True
    }


class PostRecord(ThreadChildRecord):
    """Feed entry: replies reduced to their author's image."""
    children: List[CommentPreviewRecord] = []

    @field_validator("children", mode="before")
    @classmethod
    def _no_children(cls, v):
        return v or []


class ThreadRecord(ThreadChildRecord):
    """Thread detail: one level of replies, each with its own author, community and likes."""
    children: List[ThreadChildRecord] = []

    @field_validator("children", mode="before")
    @classmethod
    def _no_children(cls, v):
        return v or []


class ThreadTabRecord(BaseModel):
    """Profile/community tab entry, keyed the way ThreadCard props are."""
    id: StrId = None
    parent_id: StrId = None
    content: Optional[str] = Field(default=None, validation_alias="text")
    author: Optional[AuthorPublicRecord] = None
    community: Optional[CommunityRecord] = None
    created_at: FixedTime = None
    comments: List[CommentPreviewRecord] = Field(default=[], validation_alias="children")
    initial_likes: ExternalIds = Field(default=[], validation_alias="likes")

    model_config = {
        "from_attributes": True
    }

    @field_validator("comments", mode="before")
    @classmethod
    def _no_comments(cls, v):
        return v or []


class ActivityRecord(BaseModel):
    id: StrId = None
    parent_id: StrId = None
    text: Optional[str] = None
    author: Optional[AuthorPublicRecord] = None
    created_at: FixedTime = None

    model_config = {
        "from_attributes": True
    }
