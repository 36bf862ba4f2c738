import pytest

from rpcwire.models import Preferences, Role, Transaction
from rpcwire.users import UserService


@pytest.mark.asyncio
async def test_create_user_assigns_sequential_ids():
    service = UserService()
    alice = await service.create_user("alice", "alice@example.com")
    bob = await service.create_user("bob", "bob@example.com")
    assert alice.id == 1
    assert bob.id == 2
    assert alice.username == "alice"
    assert bob.email == "bob@example.com"


@pytest.mark.asyncio
async def test_create_user_defaults():
    service = UserService()
    user = await service.create_user("alice", "alice@example.com")
    assert user.roles == [Role.USER]
    assert user.metadata.created_at == 1234567890
    assert user.metadata.last_login is None
    assert user.metadata.preferences == Preferences(
        theme="dark", language="en", notifications_enabled=True
    )


@pytest.mark.asyncio
async def test_shared_user_list_is_filled():
    users = []
    service = UserService(users)
    await service.create_user("alice", "alice@example.com")
    assert [u.username for u in users] == ["alice"]


@pytest.mark.asyncio
async def test_get_user_found_and_missing():
    service = UserService()
    created = await service.create_user("alice", "alice@example.com")
    assert await service.get_user(created.id) == created
    assert await service.get_user(99) is None


@pytest.mark.asyncio
async def test_returned_user_is_a_copy():
    service = UserService()
    created = await service.create_user("alice", "alice@example.com")
    created.username = "mallory"
    fetched = await service.get_user(created.id)
    assert fetched.username == "alice"


@pytest.mark.asyncio
async def test_update_preferences():
    service = UserService()
    await service.create_user("alice", "alice@example.com")
    prefs = Preferences(theme="light", language="es", notifications_enabled=False)
    updated = await service.update_preferences(1, prefs)
    assert updated.metadata.preferences == prefs
    fetched = await service.get_user(1)
    assert fetched.metadata.preferences == prefs


@pytest.mark.asyncio
async def test_update_preferences_unknown_user():
    service = UserService()
    prefs = Preferences(theme="light", language="es", notifications_enabled=False)
    with pytest.raises(LookupError):
        await service.update_preferences(42, prefs)


@pytest.mark.asyncio
async def test_process_transaction_success():
    service = UserService()
    tx = Transaction(from_=1, to=2, amount=50.0, currency="USD", timestamp=1234567890)
    result = await service.process_transaction(tx)
    assert result.success is True
    assert result.transaction_id == "tx_1234567890"
    assert result.balance == 1000.0 - tx.amount
    assert result.error is None


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0.0, -5.0])
async def test_process_transaction_invalid_amount(amount):
    service = UserService()
    tx = Transaction(from_=1, to=2, amount=amount, currency="USD", timestamp=1)
    result = await service.process_transaction(tx)
    assert result.success is False
    assert result.transaction_id is None
    assert result.balance == 1000.0
    assert result.error == "Invalid amount"


@pytest.mark.asyncio
async def test_list_users_by_role():
    service = UserService()
    await service.create_user("alice", "alice@example.com")
    await service.create_user("bob", "bob@example.com")
    users = await service.list_users_by_role(Role.USER)
    assert [u.username for u in users] == ["alice", "bob"]
    assert await service.list_users_by_role(Role.ADMIN) == []