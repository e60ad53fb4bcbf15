"""Comment Routes — every route scoped to an existing post.

Invariants:
    - Missing post → 404 before the comment is looked up
    - A comment addressed through a post it does not belong to → 404
    - Collections only see the route post's comments
"""

PATCH_HEADERS = {"Content-Type": "application/json-patch+json"}

NEW_COMMENT = {"title": "Question", "content": "Why async?", "postedBy": "carla"}


async def test_list_comments_for_post(client, seed_post):
    res = await client.get(f"/api/posts/{seed_post.id}/comments")
    assert res.status_code == 200
    comments = res.json()
    assert [c["postedBy"] for c in comments] == ["ana", "bo"]
    assert set(comments[0]) == {"id", "title", "content", "postedBy", "createdOn"}


async def test_list_comments_for_missing_post_returns_404(client):
    res = await client.get("/api/posts/88/comments")
    assert res.status_code == 404
    assert res.json()["message"] == "Post with id: 88 doesn't exist in the database."


async def test_get_comment(client, seed_comment):
    res = await client.get(f"/api/posts/{seed_comment.post_id}/comments/{seed_comment.id}")
    assert res.status_code == 200
    assert res.json()["title"] == "Nice"


async def test_get_comment_through_other_post_returns_404(
    client, seed_category, seed_comment,
):
    other_post = max(seed_category.posts, key=lambda p: p.id)
    res = await client.get(f"/api/posts/{other_post.id}/comments/{seed_comment.id}")
    assert res.status_code == 404
    assert res.json()["message"] == (
        f"Comment with id: {seed_comment.id} doesn't exist in the database."
    )


async def test_collection_is_scoped_to_post(client, seed_category, seed_comment):
    own = await client.get(
        f"/api/posts/{seed_comment.post_id}/comments/collection/({seed_comment.id})",
    )
    assert own.status_code == 200
    assert [c["id"] for c in own.json()] == [seed_comment.id]

    other_post = max(seed_category.posts, key=lambda p: p.id)
    res = await client.get(
        f"/api/posts/{other_post.id}/comments/collection/({seed_comment.id})",
    )
    assert res.status_code == 404


async def test_collection_with_empty_id_list_returns_400(client, seed_post):
    res = await client.get(f"/api/posts/{seed_post.id}/comments/collection/()")
    assert res.status_code == 400
    assert res.json() == {"statusCode": 400, "message": "Parameter ids is null"}


async def test_empty_id_list_on_missing_post_returns_404(client):
    res = await client.get("/api/posts/41/comments/collection/()")
    assert res.status_code == 404


async def test_create_comment(client, seed_post):
    res = await client.post(f"/api/posts/{seed_post.id}/comments", json=NEW_COMMENT)
    assert res.status_code == 201
    body = res.json()
    assert body["postedBy"] == "carla"
    assert body["createdOn"]
    assert res.headers["location"] == (
        f"http://test/api/posts/{seed_post.id}/comments/{body['id']}"
    )


async def test_create_comment_accepts_snake_case_names(client, seed_post):
    res = await client.post(
        f"/api/posts/{seed_post.id}/comments",
        json={"title": "t", "content": "c", "posted_by": "dan"},
    )
    assert res.status_code == 201
    assert res.json()["postedBy"] == "dan"


async def test_create_comment_on_missing_post_returns_404(client):
    res = await client.post("/api/posts/5/comments", json=NEW_COMMENT)
    assert res.status_code == 404


async def test_create_comment_with_missing_fields_returns_422(client, seed_post):
    res = await client.post(
        f"/api/posts/{seed_post.id}/comments", json={"title": "Only a title"},
    )
    assert res.status_code == 422
    assert res.json()["errors"] == {
        "content": "Comment content is a required field.",
        "postedBy": "Comment postedBy is a required field.",
    }


async def test_create_comment_collection(client, seed_post):
    res = await client.post(
        f"/api/posts/{seed_post.id}/comments/collection",
        json=[NEW_COMMENT, {**NEW_COMMENT, "postedBy": "dan"}],
    )
    assert res.status_code == 201
    ids = [c["id"] for c in res.json()]
    assert res.headers["location"] == (
        f"http://test/api/posts/{seed_post.id}/comments/collection/({ids[0]},{ids[1]})"
    )
    listed = (await client.get(f"/api/posts/{seed_post.id}/comments")).json()
    assert len(listed) == 4


async def test_create_empty_comment_collection_returns_400(client, seed_post):
    res = await client.post(f"/api/posts/{seed_post.id}/comments/collection", json=[])
    assert res.status_code == 400
    assert res.json()["message"] == "Comment collection is empty"


async def test_put_comment_returns_204(client, seed_comment):
    url = f"/api/posts/{seed_comment.post_id}/comments/{seed_comment.id}"
    res = await client.put(url, json=NEW_COMMENT)
    assert res.status_code == 204
    body = (await client.get(url)).json()
    assert body["title"] == "Question"
    assert body["postedBy"] == "carla"


async def test_put_comment_through_other_post_returns_404(
    client, seed_category, seed_comment,
):
    other_post = max(seed_category.posts, key=lambda p: p.id)
    res = await client.put(
        f"/api/posts/{other_post.id}/comments/{seed_comment.id}", json=NEW_COMMENT,
    )
    assert res.status_code == 404


async def test_patch_comment(client, seed_comment):
    url = f"/api/posts/{seed_comment.post_id}/comments/{seed_comment.id}"
    res = await client.patch(
        url,
        json=[{"op": "replace", "path": "/content", "value": "Edited"}],
        headers=PATCH_HEADERS,
    )
    assert res.status_code == 204
    assert (await client.get(url)).json()["content"] == "Edited"


async def test_patch_comment_removing_author_returns_422(client, seed_comment):
    url = f"/api/posts/{seed_comment.post_id}/comments/{seed_comment.id}"
    res = await client.patch(
        url, json=[{"op": "remove", "path": "/postedBy"}], headers=PATCH_HEADERS,
    )
    assert res.status_code == 422
    assert (await client.get(url)).json()["postedBy"] == "ana"


async def test_delete_comment(client, seed_comment):
    url = f"/api/posts/{seed_comment.post_id}/comments/{seed_comment.id}"
    assert (await client.delete(url)).status_code == 204
    assert (await client.get(url)).status_code == 404
    remaining = (await client.get(f"/api/posts/{seed_comment.post_id}/comments")).json()
    assert [c["postedBy"] for c in remaining] == ["bo"]
