"""Ownership Resolver tests — User → Project → Post chain verification.

Tests cover:
    - Owner gets the entity back
    - Missing and foreign entities fail with the identical NotFound
    - Post checks report the post id, never the project id
"""

import uuid

import pytest

from multiblog.core.errors import ResourceNotFoundError


async def test_owner_verifies_project(ownership, alice, make_project):
    project = await make_project(alice, "Alice Blog")
    verified = await ownership.verify_project_ownership(project.id, alice.id)
    assert verified.id == project.id


async def test_foreign_and_missing_project_look_identical(
    ownership, alice, bob, make_project,
):
    """Another user's project and a random id raise the same error shape."""
    project = await make_project(alice, "Alice Blog")

    with pytest.raises(ResourceNotFoundError) as foreign:
        await ownership.verify_project_ownership(project.id, bob.id)
    missing_id = uuid.uuid4()
    with pytest.raises(ResourceNotFoundError) as missing:
        await ownership.verify_project_ownership(missing_id, bob.id)

    assert foreign.value.http_status == missing.value.http_status == 404
    assert foreign.value.code == missing.value.code
    assert foreign.value.message == f"Project '{project.id}' not found"
    assert missing.value.message == f"Project '{missing_id}' not found"


async def test_owner_verifies_post(ownership, alice, make_project, make_post):
    project = await make_project(alice, "Alice Blog")
    post = await make_post(alice, project, "First")
    verified = await ownership.verify_post_ownership(post.id, alice.id)
    assert verified.id == post.id


async def test_foreign_post_reports_post_not_project(
    ownership, alice, bob, make_project, make_post,
):
    project = await make_project(alice, "Alice Blog")
    post = await make_post(alice, project, "First")

    with pytest.raises(ResourceNotFoundError) as exc_info:
        await ownership.verify_post_ownership(post.id, bob.id)

    assert exc_info.value.context.resource_type == "Post"
    assert str(project.id) not in exc_info.value.message


async def test_missing_post_not_found(ownership, alice):
    with pytest.raises(ResourceNotFoundError):
        await ownership.verify_post_ownership(uuid.uuid4(), alice.id)
