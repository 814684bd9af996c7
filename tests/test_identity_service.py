import pytest
from pydantic import ValidationError

from docvault.core.errors import (
    ConflictError, ErrorKind, ForbiddenError, NotFoundError, UnauthorizedError
)
from docvault.domains.identity.schemas import UserCreate, UserUpdate
from docvault.domains.identity.services import IdentityService


async def _register(service: IdentityService, username: str, password: str = "pw-123", **extra):
    return await service.create_user(
        UserCreate(username=username, email=f"{username}@example.com", password=password, **extra)
    )


@pytest.mark.asyncio
async def test_create_user_hashes_password(session):
    service = IdentityService(session)
    user = await _register(service, "alice", password="plain-text")

    assert user.password_hash != "plain-text"
    assert user.authenticate("plain-text") is True
    assert user.authenticate("wrong") is False


@pytest.mark.asyncio
async def test_get_user_lookups_raise_not_found(session):
    service = IdentityService(session)
    user = await _register(service, "alice")

    assert (await service.get_user_by_id(user.id)).username == "alice"
    assert (await service.get_user_by_username("alice")).id == user.id
    assert (await service.get_user_by_email("alice@example.com")).id == user.id

    with pytest.raises(NotFoundError) as excinfo:
        await service.get_user_by_id(999)
    assert excinfo.value.kind is ErrorKind.NOT_FOUND
    assert str(excinfo.value) == "User not found with id: 999"

    with pytest.raises(NotFoundError):
        await service.get_user_by_username("ghost")
    with pytest.raises(NotFoundError):
        await service.get_user_by_email("ghost@example.com")


@pytest.mark.asyncio
async def test_exists_checks(session):
    service = IdentityService(session)
    await _register(service, "alice")

    assert await service.username_exists("alice")
    assert not await service.username_exists("bob")
    assert await service.email_exists("alice@example.com")
    assert not await service.email_exists("bob@example.com")


@pytest.mark.asyncio
async def test_duplicate_registration_is_conflict(session):
    service = IdentityService(session)
    await _register(service, "alice")

    with pytest.raises(ConflictError):
        await _register(service, "alice")

    assert len(await service.list_users()) == 1


@pytest.mark.asyncio
async def test_update_user_overwrites_only_supplied_fields(session):
    service = IdentityService(session)
    user = await _register(service, "alice", full_name="Alice A")

    updated = await service.update_user(user.id, UserUpdate(email="new@example.com"))

    assert updated.email == "new@example.com"
    assert updated.username == "alice"
    assert updated.full_name == "Alice A"
    assert updated.authenticate("pw-123")


@pytest.mark.asyncio
async def test_update_user_rehashes_new_password(session):
    service = IdentityService(session)
    user = await _register(service, "alice")

    await service.update_user(user.id, UserUpdate(password="changed"))

    assert (await service.authenticate("alice", "changed")).id == user.id
    with pytest.raises(UnauthorizedError):
        await service.authenticate("alice", "pw-123")


@pytest.mark.asyncio
async def test_update_user_rejects_taken_username(session):
    service = IdentityService(session)
    await _register(service, "alice")
    bob = await _register(service, "bob")

    with pytest.raises(ConflictError):
        await service.update_user(bob.id, UserUpdate(username="alice"))
    with pytest.raises(ConflictError):
        await service.update_user(bob.id, UserUpdate(email="alice@example.com"))


@pytest.mark.asyncio
async def test_update_missing_user_is_not_found(session):
    with pytest.raises(NotFoundError):
        await IdentityService(session).update_user(42, UserUpdate(full_name="x"))


@pytest.mark.asyncio
async def test_delete_user(session):
    service = IdentityService(session)
    user = await _register(service, "alice")

    await service.delete_user(user.id)

    with pytest.raises(NotFoundError):
        await service.get_user_by_id(user.id)
    with pytest.raises(NotFoundError):
        await service.delete_user(user.id)


@pytest.mark.asyncio
async def test_authenticate(session):
    service = IdentityService(session)
    user = await _register(service, "alice")

    assert (await service.authenticate("alice", "pw-123")).id == user.id

    with pytest.raises(UnauthorizedError):
        await service.authenticate("alice", "nope")
    with pytest.raises(UnauthorizedError):
        await service.authenticate("ghost", "pw-123")
    with pytest.raises(UnauthorizedError):
        await service.authenticate(None, None)

    await service.toggle_active(user.id)
    with pytest.raises(ForbiddenError):
        await service.authenticate("alice", "pw-123")


@pytest.mark.asyncio
async def test_authenticate_admin(session):
    service = IdentityService(session)
    admin = await _register(service, "root", is_admin=True)
    await _register(service, "alice")

    assert (await service.authenticate_admin("root", "pw-123")).id == admin.id

    with pytest.raises(UnauthorizedError, match="Admin access required"):
        await service.authenticate_admin("alice", "pw-123")
    with pytest.raises(UnauthorizedError, match="Invalid username or password"):
        await service.authenticate_admin("root", "bad")
    with pytest.raises(UnauthorizedError, match="Invalid credentials"):
        await service.authenticate_admin("ghost", "pw-123")

    await service.toggle_admin(admin.id)
    with pytest.raises(UnauthorizedError):
        await service.authenticate_admin("root", "pw-123")


@pytest.mark.asyncio
async def test_inactive_admin_cannot_use_admin_login(session):
    service = IdentityService(session)
    admin = await _register(service, "root", is_admin=True)

    await service.toggle_active(admin.id)

    with pytest.raises(UnauthorizedError):
        await service.authenticate_admin("root", "pw-123")


@pytest.mark.asyncio
async def test_toggles_flip_flags(session):
    service = IdentityService(session)
    user = await _register(service, "alice")

    assert (await service.toggle_active(user.id)).is_active is False
    assert (await service.toggle_active(user.id)).is_active is True
    assert (await service.toggle_admin(user.id)).is_admin is True

    with pytest.raises(NotFoundError):
        await service.toggle_admin(999)


@pytest.mark.asyncio
async def test_stats(session):
    service = IdentityService(session)
    assert await service.get_stats() == {
        "total_users": 0, "active_users": 0, "inactive_users": 0, "admin_users": 0
    }

    await _register(service, "root", is_admin=True)
    await _register(service, "alice")
    bob = await _register(service, "bob")
    await service.toggle_active(bob.id)

    assert await service.get_stats() == {
        "total_users": 3, "active_users": 2, "inactive_users": 1, "admin_users": 1
    }


@pytest.mark.asyncio
async def test_update_user_clears_full_name_when_sent_as_null(session):
    service = IdentityService(session)
    user = await _register(service, "alice", full_name="Alice A")

    updated = await service.update_user(user.id, UserUpdate(full_name=None))

    assert updated.full_name is None
    assert (await service.get_user_by_id(user.id)).full_name is None


def test_user_update_rejects_null_for_required_fields():
    with pytest.raises(ValidationError, match="username must not be null"):
        UserUpdate(username=None)
    with pytest.raises(ValidationError, match="isActive must not be null"):
        UserUpdate.model_validate({"isActive": None})

    assert UserUpdate(full_name=None).changes() == {"full_name": None}
    assert UserUpdate().changes() == {}
