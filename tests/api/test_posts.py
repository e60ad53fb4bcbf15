"""Post Routes — flat access, category-scoped creation, moves between categories.

Invariants:
    - Post outputs carry the category name, category-scoped creation omits it
    - PUT/PATCH answer 204 and never touch a missing target category
    - Collection fetch is all-or-nothing
"""

import asyncio

PATCH_HEADERS = {"Content-Type": "application/json-patch+json"}

NEW_POST = {"title": "Typing", "slug": "typing", "content": "Protocols and generics"}


async def test_list_posts_carries_category_name(client, seed_category):
    res = await client.get("/api/posts")
    assert res.status_code == 200
    posts = res.json()
    assert len(posts) == 2
    assert {p["category"] for p in posts} == {"Tech"}


async def test_get_post_returns_full_output(client, seed_post):
    res = await client.get(f"/api/posts/{seed_post.id}")
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "Async Python"
    assert body["category"] == "Tech"
    assert body["slug"] == "async-python"
    assert body["summary"] == "Event loops"
    assert body["isPublished"] is True
    assert body["createdOn"]
    assert body["lastModifiedOn"]


async def test_get_missing_post_returns_404(client):
    res = await client.get("/api/posts/999")
    assert res.status_code == 404
    assert res.json()["message"] == "Post with id: 999 doesn't exist in the database."


async def test_collection_with_gap_returns_404(client, seed_category):
    """Posts 1 and 3 exist, 2 was deleted: (1,2,3) fails as a whole."""
    await client.post(f"/api/categories/{seed_category.id}/posts", json=NEW_POST)
    assert (await client.delete("/api/posts/2")).status_code == 204

    res = await client.get("/api/posts/collection/(1,2,3)")
    assert res.status_code == 404

    res = await client.get("/api/posts/collection/(1,3)")
    assert res.status_code == 200
    assert sorted(p["id"] for p in res.json()) == [1, 3]


async def test_collection_with_empty_id_list_returns_400(client, seed_post):
    res = await client.get("/api/posts/collection/()")
    assert res.status_code == 400
    assert res.json() == {"statusCode": 400, "message": "Parameter ids is null"}


async def test_collection_with_duplicate_ids_is_complete(client, seed_post):
    res = await client.get(f"/api/posts/collection/({seed_post.id},{seed_post.id})")
    assert res.status_code == 200
    assert len(res.json()) == 1


async def test_list_posts_for_category(client, seed_category, seed_other_category):
    res = await client.get(f"/api/categories/{seed_category.id}/posts")
    assert res.status_code == 200
    assert [p["slug"] for p in res.json()] == ["async-python", "sqlalchemy-2"]
    assert "category" not in res.json()[0]

    res = await client.get(f"/api/categories/{seed_other_category.id}/posts")
    assert res.json() == []


async def test_list_posts_for_missing_category_returns_404(client):
    res = await client.get("/api/categories/77/posts")
    assert res.status_code == 404
    assert res.json()["message"] == "Category with id: 77 doesn't exist in the database."


async def test_get_post_through_wrong_category_returns_404(
    client, seed_post, seed_other_category,
):
    ok = await client.get(f"/api/categories/{seed_post.category_id}/posts/{seed_post.id}")
    assert ok.status_code == 200
    assert ok.json()["category"] == "Tech"

    res = await client.get(
        f"/api/categories/{seed_other_category.id}/posts/{seed_post.id}",
    )
    assert res.status_code == 404


async def test_create_post_in_category(client, seed_other_category):
    res = await client.post(
        f"/api/categories/{seed_other_category.id}/posts", json=NEW_POST,
    )
    assert res.status_code == 201
    body = res.json()
    assert body["title"] == "Typing"
    assert body["isPublished"] is False
    assert body["summary"] is None
    assert "category" not in body
    assert res.headers["location"] == f"http://test/api/posts/{body['id']}"

    created = (await client.get(f"/api/posts/{body['id']}")).json()
    assert created["category"] == "Life"


async def test_create_post_in_missing_category_returns_404(client):
    res = await client.post("/api/categories/12/posts", json=NEW_POST)
    assert res.status_code == 404


async def test_create_post_without_title_returns_422(client, seed_category):
    res = await client.post(
        f"/api/categories/{seed_category.id}/posts",
        json={"slug": "x", "content": "y"},
    )
    assert res.status_code == 422
    assert res.json()["errors"] == {"title": "Post title is a required field."}


async def test_create_post_collection(client, seed_other_category):
    res = await client.post(
        f"/api/categories/{seed_other_category.id}/posts/collection",
        json=[NEW_POST, {**NEW_POST, "slug": "typing-2"}],
    )
    assert res.status_code == 201
    ids = [p["id"] for p in res.json()]
    assert len(ids) == 2
    assert res.headers["location"] == (
        f"http://test/api/posts/collection/({ids[0]},{ids[1]})"
    )


async def test_put_post_returns_204_and_updates(client, seed_post):
    url = f"/api/posts/{seed_post.id}"
    res = await client.put(url, json={**NEW_POST, "isPublished": True})
    assert res.status_code == 204
    assert res.content == b""

    body = (await client.get(url)).json()
    assert body["title"] == "Typing"
    assert body["summary"] is None
    assert body["isPublished"] is True
    assert body["category"] == "Tech"


async def test_same_put_twice_leaves_same_state(client, seed_post):
    url = f"/api/posts/{seed_post.id}"
    await client.put(url, json=NEW_POST)
    first = (await client.get(url)).json()
    await client.put(url, json=NEW_POST)
    second = (await client.get(url)).json()
    first.pop("lastModifiedOn")
    second.pop("lastModifiedOn")
    assert first == second


async def test_put_moves_post_to_another_category(client, seed_post, seed_other_category):
    url = f"/api/posts/{seed_post.id}"
    res = await client.put(url, json={**NEW_POST, "categoryId": seed_other_category.id})
    assert res.status_code == 204
    assert (await client.get(url)).json()["category"] == "Life"


async def test_put_to_missing_category_returns_404_and_keeps_post(client, seed_post):
    url = f"/api/posts/{seed_post.id}"
    res = await client.put(url, json={**NEW_POST, "categoryId": 404})
    assert res.status_code == 404
    body = (await client.get(url)).json()
    assert body["title"] == "Async Python"
    assert body["category"] == "Tech"


async def test_put_missing_post_returns_404(client):
    res = await client.put("/api/posts/31", json=NEW_POST)
    assert res.status_code == 404


async def test_patch_empty_document_leaves_post_unchanged(client, seed_post):
    url = f"/api/posts/{seed_post.id}"
    before = (await client.get(url)).json()
    res = await client.patch(url, content=b"[]", headers=PATCH_HEADERS)
    assert res.status_code == 204
    after = (await client.get(url)).json()
    before.pop("lastModifiedOn")
    after.pop("lastModifiedOn")
    assert after == before


async def test_patch_replaces_single_field(client, seed_post):
    url = f"/api/posts/{seed_post.id}"
    res = await client.patch(
        url,
        json=[{"op": "replace", "path": "/isPublished", "value": False}],
        headers=PATCH_HEADERS,
    )
    assert res.status_code == 204
    body = (await client.get(url)).json()
    assert body["isPublished"] is False
    assert body["title"] == "Async Python"


async def test_patch_removing_title_returns_422_and_keeps_post(client, seed_post):
    url = f"/api/posts/{seed_post.id}"
    res = await client.patch(
        url, json=[{"op": "remove", "path": "/title"}], headers=PATCH_HEADERS,
    )
    assert res.status_code == 422
    assert res.json()["errors"] == {"title": "Post title is a required field."}
    assert (await client.get(url)).json()["title"] == "Async Python"


async def test_patch_moves_post_between_categories(client, seed_post, seed_other_category):
    url = f"/api/posts/{seed_post.id}"
    res = await client.patch(
        url,
        json=[{"op": "replace", "path": "/categoryId", "value": seed_other_category.id}],
        headers=PATCH_HEADERS,
    )
    assert res.status_code == 204
    assert (await client.get(url)).json()["category"] == "Life"


async def test_patch_to_missing_category_returns_404(client, seed_post):
    res = await client.patch(
        f"/api/posts/{seed_post.id}",
        json=[{"op": "replace", "path": "/categoryId", "value": 500}],
        headers=PATCH_HEADERS,
    )
    assert res.status_code == 404


async def test_patch_failed_test_operation_returns_400(client, seed_post):
    res = await client.patch(
        f"/api/posts/{seed_post.id}",
        json=[{"op": "test", "path": "/title", "value": "Something else"}],
        headers=PATCH_HEADERS,
    )
    assert res.status_code == 400


async def test_delete_post_removes_its_comments(client, seed_post):
    res = await client.delete(f"/api/posts/{seed_post.id}")
    assert res.status_code == 204
    assert (await client.get(f"/api/posts/{seed_post.id}")).status_code == 404
    assert (await client.get(f"/api/posts/{seed_post.id}/comments")).status_code == 404
    assert len((await client.get("/api/posts")).json()) == 1


async def test_patch_fractional_category_id_returns_400(client, seed_post):
    url = f"/api/posts/{seed_post.id}"
    res = await client.patch(
        url,
        json=[{"op": "replace", "path": "/categoryId", "value": 1.5}],
        headers=PATCH_HEADERS,
    )
    assert res.status_code == 400
    assert res.json()["statusCode"] == 400
    assert (await client.get(url)).json()["category"] == "Tech"


async def test_update_refreshes_last_modified_but_not_created(client, seed_post):
    """The store stamps lastModifiedOn on UPDATE with second precision on SQLite."""
    url = f"/api/posts/{seed_post.id}"
    before = (await client.get(url)).json()

    await asyncio.sleep(1.1)
    res = await client.patch(
        url,
        json=[{"op": "replace", "path": "/title", "value": "Async Python, revised"}],
        headers=PATCH_HEADERS,
    )
    assert res.status_code == 204

    after = (await client.get(url)).json()
    assert after["createdOn"] == before["createdOn"]
    assert after["lastModifiedOn"] != before["lastModifiedOn"]
    assert after["lastModifiedOn"] > before["lastModifiedOn"]


async def test_put_refreshes_last_modified(client, seed_post):
    url = f"/api/posts/{seed_post.id}"
    before = (await client.get(url)).json()

    await asyncio.sleep(1.1)
    assert (await client.put(url, json=NEW_POST)).status_code == 204

    after = (await client.get(url)).json()
    assert after["createdOn"] == before["createdOn"]
    assert after["lastModifiedOn"] > before["lastModifiedOn"]
