"""Post Route tests — HTTP contract for owner-only post CRUD.

Tests cover:
    - Create 201, duplicate slug in project 409, empty slug 400
    - Foreign post → 404 on every verb
    - PUT updates, DELETE 204 then 404
"""

import uuid


async def test_create_post_and_conflict(client, alice, auth_headers, make_project):
    project = await make_project(alice, "Alice Blog")
    headers = auth_headers(alice)
    payload = {"title": "Hello World", "content": "Hi", "project_id": str(project.id)}

    resp = await client.post("/api/v1/posts", json=payload, headers=headers)
    assert resp.status_code == 201
    assert resp.json()["slug"] == "hello-world"

    resp = await client.post(
        "/api/v1/posts", json={**payload, "title": "Hello World!!"}, headers=headers,
    )
    assert resp.status_code == 409


async def test_create_post_unsluggable_title_400(client, alice, auth_headers, make_project):
    project = await make_project(alice, "Alice Blog")
    resp = await client.post(
        "/api/v1/posts",
        json={"title": "!!!", "content": "Hi", "project_id": str(project.id)},
        headers=auth_headers(alice),
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_SLUG"


async def test_create_post_in_foreign_project_404(
    client, alice, bob, auth_headers, make_project,
):
    project = await make_project(alice, "Alice Blog")
    resp = await client.post(
        "/api/v1/posts",
        json={"title": "Sneaky", "content": "Hi", "project_id": str(project.id)},
        headers=auth_headers(bob),
    )
    assert resp.status_code == 404


async def test_foreign_post_is_404_everywhere(
    client, alice, bob, auth_headers, make_project, make_post,
):
    post = await make_post(alice, await make_project(alice, "Alice Blog"), "Mine")
    url = f"/api/v1/posts/{post.id}"
    headers = auth_headers(bob)

    assert (await client.get(url, headers=headers)).status_code == 404
    assert (await client.put(url, json={"title": "Theirs"}, headers=headers)).status_code == 404
    assert (await client.delete(url, headers=headers)).status_code == 404
    assert (await client.get(url, headers=auth_headers(alice))).status_code == 200


async def test_update_and_delete_own_post(
    client, alice, auth_headers, make_project, make_post,
):
    post = await make_post(alice, await make_project(alice, "Alice Blog"), "Draft")
    url = f"/api/v1/posts/{post.id}"
    headers = auth_headers(alice)

    resp = await client.put(url, json={"title": "Final Version"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["slug"] == "final-version"

    resp = await client.delete(url, headers=headers)
    assert resp.status_code == 204
    assert (await client.get(url, headers=headers)).status_code == 404


async def test_list_own_posts(client, alice, bob, auth_headers, make_project, make_post):
    await make_post(alice, await make_project(alice, "Alice Blog"), "Mine")
    await make_post(bob, await make_project(bob, "Bob Blog"), "Theirs")

    resp = await client.get("/api/v1/posts", headers=auth_headers(alice))
    assert resp.status_code == 200
    assert [p["title"] for p in resp.json()] == ["Mine"]


async def test_malformed_post_id_400(client, alice, auth_headers):
    resp = await client.get("/api/v1/posts/not-a-uuid", headers=auth_headers(alice))
    assert resp.status_code == 400


async def test_missing_post_404(client, alice, auth_headers):
    resp = await client.get(f"/api/v1/posts/{uuid.uuid4()}", headers=auth_headers(alice))
    assert resp.status_code == 404


async def test_put_full_body_with_unchanged_title_keeps_slug(
    client, alice, auth_headers, make_project, make_post,
):
    project = await make_project(alice, "Alice Blog")
    await make_post(alice, project, "Hello World")
    post = await make_post(alice, project, "Hello World", slug="second")

    resp = await client.put(
        f"/api/v1/posts/{post.id}",
        json={"title": "Hello World", "content": "edited", "project_id": str(project.id)},
        headers=auth_headers(alice),
    )
    assert resp.status_code == 200
    assert resp.json()["slug"] == "second"
