# threadly/views/threads_tab.py
from typing import List

from threadly.schemas.page_schemas import AccountType
from threadly.schemas.thread_schemas import ThreadCardOut
from threadly.utils.sanitize import sanitize_thread_tab_data
from threadly.views.thread_card import build_thread_card


def build_threads_tab(account, account_type: AccountType, current_user_id: str) -> List[ThreadCardOut]:
    """
    Cards for every thread of a profile or community page. The account being
    viewed stands in for the author (User) or the community (Community).
    """
    owner = {"id": account.external_id, "name": account.name, "image": account.image}

    cards = []
    for post in account.threads:
        thread = sanitize_thread_tab_data(post)
        author = owner if account_type == "User" else thread["author"]
        community = owner if account_type == "Community" else thread["community"]
        cards.append(
            build_thread_card(
                id=thread["id"],
                current_user_id=current_user_id,
                parent_id=thread["parent_id"],
                content=thread["content"],
                author=author,
                community=community,
                created_at=thread["created_at"],
                comments=thread["comments"],
                initial_likes=thread["initial_likes"],
            )
        )
    return cards
