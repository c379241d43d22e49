# threadly/utils/sanitize.py
"""
Turn ORM rows into plain, JSON-safe dicts for the page views.

Each view has its own record schema in `threadly.schemas.record_schemas`; the
functions here validate a row against it and dump by alias, so `_id` keys
survive. Mappings work too, which keeps them usable without a database.
"""
from typing import Any

from threadly.schemas.record_schemas import (
    ActivityRecord,
    CommunityRecord,
    PostRecord,
    ThreadRecord,
    ThreadTabRecord,
    format_timestamp,  # noqa: F401  (re-exported)
)


def sanitize_post_data(post: Any) -> dict:
    return PostRecord.model_validate(post).model_dump(by_alias=True)


def sanitize_thread_data(thread: Any) -> dict:
    return ThreadRecord.model_validate(thread).model_dump(by_alias=True)


def sanitize_thread_tab_data(thread: Any) -> dict:
    return ThreadTabRecord.model_validate(thread).model_dump(by_alias=True)


def sanitize_activity_data(reply: Any) -> dict:
    return ActivityRecord.model_validate(reply).model_dump(by_alias=True)


def sanitize_community_data(community: Any) -> dict:
    return CommunityRecord.model_validate(community).model_dump(by_alias=True)
