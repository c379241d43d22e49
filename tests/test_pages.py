import pytest

from helpers import at, auth_headers


@pytest.mark.asyncio
async def test_gated_page_without_identity_renders_nothing(client):
    r = await client.get("/")
    assert r.status_code == 204
    assert r.content == b""


@pytest.mark.asyncio
async def test_gated_page_with_bad_token_renders_nothing(client):
    r = await client.get("/", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 204


@pytest.mark.asyncio
async def test_unknown_user_goes_to_onboarding(client):
    r = await client.get("/", headers=auth_headers("user_new"))
    assert r.status_code == 307
    assert r.headers["location"] == "/onboarding"


@pytest.mark.asyncio
async def test_not_onboarded_user_goes_to_onboarding(client, seed):
    await seed.user("user_half", "half", onboarded=False)
    for path in ("/", "/thread/1", "/activity", "/search", "/profile/user_half/threads"):
        r = await client.get(path, headers=auth_headers("user_half"))
        assert r.status_code == 307, path
        assert r.headers["location"] == "/onboarding"


@pytest.mark.asyncio
async def test_home_feed(client, seed):
    alice = await seed.user("user_alice", "alice")
    bob = await seed.user("user_bob", "bob")
    garden = await seed.community("org_garden", "Gardening")
    older = await seed.thread(alice, "older", created_at=at(0), likers=[bob])
    await seed.thread(bob, "newer", community=garden, created_at=at(1))
    await seed.thread(bob, "a reply", parent=older, created_at=at(2))

    r = await client.get("/", headers=auth_headers("user_bob"))
    assert r.status_code == 200
    body = r.json()
    assert body["page"] == 1
    assert body["is_next"] is False
    assert [t["content"] for t in body["threads"]] == ["newer", "older"]

    newer, old = body["threads"]
    assert newer["community"] == {"id": "org_garden", "name": "Gardening", "image": garden.image}
    assert newer["current_user_id"] == "user_bob"
    assert old["id"] == str(older.id)
    assert old["author"]["id"] == "user_alice"
    assert old["initial_likes"] == ["user_bob"]
    assert old["likes"] == 1
    assert old["liked_by_user"] is True
    assert old["reply_label"] == "1 reply"
    assert old["comment_avatars"] == [bob.image]


@pytest.mark.asyncio
async def test_home_feed_empty(client, seed):
    await seed.user("user_alice", "alice")
    r = await client.get("/?page=1", headers=auth_headers("user_alice"))
    assert r.status_code == 200
    assert r.json() == {"threads": [], "page": 1, "is_next": False}


@pytest.mark.asyncio
async def test_thread_detail(client, seed):
    alice = await seed.user("user_alice", "alice")
    bob = await seed.user("user_bob", "bob")
    parent = await seed.thread(alice, "parent", created_at=at(0))
    reply = await seed.thread(bob, "child", parent=parent, created_at=at(1), likers=[alice])

    r = await client.get(f"/thread/{parent.id}", headers=auth_headers("user_alice"))
    assert r.status_code == 200
    body = r.json()

    assert body["thread"]["content"] == "parent"
    assert body["thread"]["is_comment"] is False
    assert body["thread"]["reply_label"] == "1 reply"
    assert body["comment_form"] == {
        "thread_id": str(parent.id),
        "current_user_img": alice.image,
        "current_user_id": "user_alice",
    }

    [child] = body["replies"]
    assert child["id"] == str(reply.id)
    assert child["parent_id"] == str(parent.id)
    assert child["is_comment"] is True
    assert child["liked_by_user"] is True
    assert child["comment_avatars"] == []


@pytest.mark.asyncio
async def test_thread_detail_missing(client, seed):
    await seed.user("user_alice", "alice")
    r = await client.get("/thread/12345", headers=auth_headers("user_alice"))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_profile_threads_tab(client, seed):
    alice = await seed.user("user_alice", "alice", name="Alice")
    bob = await seed.user("user_bob", "bob")
    t = await seed.thread(alice, "mine", created_at=at(0))
    await seed.thread(bob, "reply", parent=t, created_at=at(1))
    await seed.thread(bob, "not mine", created_at=at(2))

    r = await client.get("/profile/user_alice/threads", headers=auth_headers("user_bob"))
    assert r.status_code == 200
    body = r.json()
    assert body["account_type"] == "User"
    [card] = body["threads"]
    assert card["content"] == "mine"
    assert card["author"] == {"id": "user_alice", "name": "Alice", "image": alice.image}
    assert card["comments"] == [{"author": {"image": bob.image}}]
    assert card["created_at"] == "2024-03-01T09:30:00.000Z"


@pytest.mark.asyncio
async def test_community_threads_tab(client, seed):
    alice = await seed.user("user_alice", "alice")
    garden = await seed.community("org_garden", "Gardening")
    await seed.thread(alice, "tomatoes", community=garden)

    r = await client.get("/communities/org_garden/threads", headers=auth_headers("user_alice"))
    assert r.status_code == 200
    [card] = r.json()["threads"]
    assert card["community"] == {"id": "org_garden", "name": "Gardening", "image": garden.image}
    assert card["author"]["id"] == "user_alice"


@pytest.mark.asyncio
async def test_threads_tab_for_missing_account_goes_home(client, seed):
    await seed.user("user_alice", "alice")
    for path in ("/profile/ghost/threads", "/communities/ghost/threads"):
        r = await client.get(path, headers=auth_headers("user_alice"))
        assert r.status_code == 307
        assert r.headers["location"] == "/"


@pytest.mark.asyncio
async def test_profile_page_lists_communities(client, seed):
    alice = await seed.user("user_alice", "alice")
    await seed.community("org_garden", "Gardening", members=[alice])

    r = await client.get("/profile/user_alice", headers=auth_headers("user_alice"))
    assert r.status_code == 200
    body = r.json()
    assert body["username"] == "alice"
    assert body["onboarded"] is True
    assert [c["id"] for c in body["communities"]] == ["org_garden"]

    r = await client.get("/profile/ghost", headers=auth_headers("user_alice"))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_activity_page(client, seed):
    a = await seed.user("user_a", "usera")
    b = await seed.user("user_b", "userb")
    t1 = await seed.thread(a, "one", created_at=at(0))
    t2 = await seed.thread(a, "two", created_at=at(1))
    await seed.thread(b, "from b", parent=t1, created_at=at(2))
    await seed.thread(a, "self reply", parent=t2, created_at=at(3))

    r = await client.get("/activity", headers=auth_headers("user_a"))
    assert r.status_code == 200
    items = r.json()["items"]
    assert [i["text"] for i in items] == ["from b"]
    assert items[0]["author"]["id"] == "user_b"
    assert items[0]["parent_id"] == str(t1.id)


@pytest.mark.asyncio
async def test_search_page(client, seed):
    await seed.user("A", "alice", created_at=at(0))
    await seed.user("user_john", "john", name="John", created_at=at(1))
    await seed.user("user_joan", "joan", name="Joan", created_at=at(2))

    r = await client.get("/search?q=jo&page_size=1", headers=auth_headers("A"))
    assert r.status_code == 200
    body = r.json()
    assert [u["username"] for u in body["users"]] == ["joan"]
    assert body["is_next"] is True

    r = await client.get("/search?sort_by=sideways", headers=auth_headers("A"))
    assert r.status_code == 422
