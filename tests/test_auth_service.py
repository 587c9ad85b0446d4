"""
Tests for AuthService signup / login / authenticate.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from auth.errors import (
    AccountNotFound,
    DuplicateAccount,
    InternalError,
    InvalidCredentials,
    InvalidTokenError,
)
from auth.jwt import TokenIssuer
from auth.models import LoginRequest, SignupRequest
from auth.password import PasswordHasher
from auth.service import AuthService
from auth.store import InMemoryCredentialStore


def _signup(email="a@x.com", username="alice", password="pw1", **profile) -> SignupRequest:
    return SignupRequest(email=email, username=username, password=password, **profile)


@pytest.fixture
def store():
    return InMemoryCredentialStore()


@pytest.fixture
def service(store):
    return AuthService(
        store=store,
        hasher=PasswordHasher(rounds=4),
        issuer=TokenIssuer("test-secret"),
    )


class TestSignup:
    @pytest.mark.asyncio
    async def test_signup_creates_account(self, service, store):
        result = await service.signup(_signup(city="Pune"))

        assert result.message == "User created successfully"
        assert result.token
        accounts = await store.load()
        account = accounts["a@x.com"]
        assert account.id == result.user_id
        assert account.username == "alice"
        assert account.model_extra == {"city": "Pune"}

    @pytest.mark.asyncio
    async def test_password_is_hashed(self, service, store):
        await service.signup(_signup())
        account = (await store.load())["a@x.com"]
        assert account.password_hash
        assert account.password_hash != "pw1"

    @pytest.mark.asyncio
    async def test_same_password_different_hashes(self, service, store):
        await service.signup(_signup())
        await service.signup(_signup(email="b@x.com", username="bob"))
        accounts = await store.load()
        assert accounts["a@x.com"].password_hash != accounts["b@x.com"].password_hash

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service):
        await service.signup(_signup())
        with pytest.raises(DuplicateAccount):
            await service.signup(_signup(username="alice2"))

    @pytest.mark.asyncio
    async def test_duplicate_username(self, service):
        await service.signup(_signup())
        with pytest.raises(DuplicateAccount):
            await service.signup(_signup(email="other@x.com"))

    @pytest.mark.asyncio
    async def test_client_cannot_choose_id(self, service):
        result = await service.signup(_signup(id="chosen-id"))
        assert result.user_id != "chosen-id"

    @pytest.mark.asyncio
    async def test_concurrent_signups_do_not_lose_updates(self, service, store):
        results = await asyncio.gather(
            service.signup(_signup()),
            service.signup(_signup()),
            service.signup(_signup(email="b@x.com", username="bob")),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], DuplicateAccount)
        assert sorted(await store.load()) == ["a@x.com", "b@x.com"]

    @pytest.mark.asyncio
    async def test_storage_fault_is_internal_error(self, service, store):
        store.save = AsyncMock(side_effect=OSError("disk full"))
        with pytest.raises(InternalError) as excinfo:
            await service.signup(_signup())
        assert excinfo.value.error == "disk full"
        assert "pw1" not in str(excinfo.value.to_body())


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_by_username_and_email(self, service):
        created = await service.signup(_signup())

        by_name = await service.login(LoginRequest(identifier="alice", password="pw1"))
        by_email = await service.login(LoginRequest(identifier="a@x.com", password="pw1"))

        assert by_name.message == "Login successful"
        assert by_name.user_id == created.user_id
        assert by_email.user_id == created.user_id
        assert by_name.token != created.token

    @pytest.mark.asyncio
    async def test_wrong_password(self, service):
        await service.signup(_signup())
        with pytest.raises(InvalidCredentials):
            await service.login(LoginRequest(identifier="alice", password="wrong"))

    @pytest.mark.asyncio
    async def test_missing_password(self, service):
        await service.signup(_signup())
        with pytest.raises(InvalidCredentials):
            await service.login(LoginRequest(identifier="alice"))

    @pytest.mark.asyncio
    async def test_unknown_identifier(self, service):
        await service.signup(_signup())
        with pytest.raises(AccountNotFound):
            await service.login(LoginRequest(identifier="bob", password="pw1"))

    @pytest.mark.asyncio
    async def test_load_fault_is_internal_error(self, service, store):
        store.load = AsyncMock(side_effect=RuntimeError("boom"))
        with pytest.raises(InternalError):
            await service.login(LoginRequest(identifier="alice", password="pw1"))


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_token_from_login_authenticates(self, service):
        result = await service.signup(_signup())
        assert service.authenticate(result.token) == result.user_id

    def test_garbage_token(self, service):
        with pytest.raises(InvalidTokenError):
            service.authenticate("nope")
