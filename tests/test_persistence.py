"""
Persistence tests — writes are committed through ``session_scope`` and read
back in a fresh session, so values come from the database rather than from
the identity map of the session that wrote them.
"""
from datetime import datetime, timedelta, timezone

import pytest

from socialnet.database import session_scope
from socialnet.schemas import UserCreate
from socialnet.services import ServiceRegistry

UTC_PLUS_7 = timezone(timedelta(hours=7))


@pytest.mark.asyncio
async def test_user_fields_survive_commit(session_factory):
    data = UserCreate(
        email="stored@x.com",
        password="pw",
        name="Stored",
        birthday=datetime(1990, 5, 17, 3, 0, tzinfo=UTC_PLUS_7),
        link_social_media="https://social.example/stored",
        bio="Bio",
    )
    async with session_scope(session_factory) as session:
        created = await ServiceRegistry(session).users.create(data)

    async with session_factory() as session:
        fetched = await ServiceRegistry(session).users.get_by_id(created.id)

    assert fetched is not None
    assert fetched.model_dump(exclude={"id", "created_at", "updated_at"}) == data.model_dump(
        exclude={"id"}
    )
    # Same instant, normalized to UTC.
    assert fetched.birthday == datetime(1990, 5, 16, 20, 0, tzinfo=timezone.utc)
    assert fetched.birthday.utcoffset() == timedelta(0)
    assert fetched.created_at == created.created_at
    assert fetched.created_at == fetched.updated_at
    assert fetched.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_naive_birthday_is_stored_as_utc(session_factory):
    async with session_scope(session_factory) as session:
        created = await ServiceRegistry(session).users.create(
            {"email": "naive@x.com", "password": "pw", "birthday": datetime(2001, 1, 2, 12, 30)}
        )

    async with session_factory() as session:
        fetched = await ServiceRegistry(session).users.get_by_id(created.id)

    assert fetched.birthday == datetime(2001, 1, 2, 12, 30, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_updated_at_increases_across_sessions(session_factory):
    async with session_scope(session_factory) as session:
        user = await ServiceRegistry(session).users.create({"email": "tick@x.com", "password": "pw"})

    stamps = [user.updated_at]
    for i in range(3):
        async with session_scope(session_factory) as session:
            user = await ServiceRegistry(session).users.update(user.id, {"name": f"Name {i}"})
        stamps.append(user.updated_at)

    async with session_factory() as session:
        fetched = await ServiceRegistry(session).users.get_by_id(user.id)

    assert all(later > earlier for earlier, later in zip(stamps, stamps[1:]))
    assert fetched.updated_at == stamps[-1]
    assert fetched.created_at == stamps[0]
    assert fetched.name == "Name 2"


@pytest.mark.asyncio
async def test_role_permissions_survive_update(session_factory):
    async with session_scope(session_factory) as session:
        services = ServiceRegistry(session)
        read = await services.permissions.create({"name": "post:read"})
        write = await services.permissions.create({"name": "post:write"})
        role = await services.roles.create(
            {"name": "editor", "permission_ids": [read.id, write.id]}
        )

    async with session_scope(session_factory) as session:
        await ServiceRegistry(session).roles.update(role.id, {"permission_ids": [write.id]})

    async with session_factory() as session:
        fetched = await ServiceRegistry(session).roles.get_by_id(role.id)

    assert fetched.permission_ids == [write.id]
    assert fetched.updated_at > role.updated_at


@pytest.mark.asyncio
async def test_role_permissions_cleared_by_null_survive_commit(session_factory):
    async with session_scope(session_factory) as session:
        services = ServiceRegistry(session)
        permission = await services.permissions.create({"name": "comment:delete"})
        role = await services.roles.create({"name": "moderator", "permission_ids": [permission.id]})

    async with session_scope(session_factory) as session:
        await ServiceRegistry(session).roles.update(role.id, {"permission_ids": None})

    async with session_factory() as session:
        services = ServiceRegistry(session)
        fetched = await services.roles.get_by_id(role.id)
        assert fetched.permission_ids == []
        assert await services.permissions.get_by_id(permission.id) is not None
