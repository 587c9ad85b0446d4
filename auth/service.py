"""
AuthService — signup, login and bearer-token authentication.

Orchestrates the credential store, password hasher and token issuer.
Domain failures are raised as ``auth.errors`` exceptions; anything else
that goes wrong inside an operation is logged and re-raised as
``InternalError``.

Signups are serialised through a single ``asyncio.Lock`` so the
load → uniqueness check → save cycle cannot interleave within a process.
"""

from __future__ import annotations

import asyncio
import logging
import uuid

from auth.errors import AccountNotFound, AuthError, DuplicateAccount, InternalError, InvalidCredentials
from auth.jwt import TokenIssuer
from auth.models import Account, AuthResult, LoginRequest, SignupRequest
from auth.password import PasswordHasher
from auth.store import CredentialStore, find_by_identifier, username_taken

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        issuer: TokenIssuer,
    ):
        self.store = store
        self.hasher = hasher
        self.issuer = issuer
        self._write_lock = asyncio.Lock()

    async def signup(self, req: SignupRequest) -> AuthResult:
        """Register a new account and return a session token for it."""
        try:
            async with self._write_lock:
                accounts = await self.store.load()

                if req.email in accounts or username_taken(accounts, req.username):
                    logger.info("Signup rejected, duplicate account: %s", req.username)
                    raise DuplicateAccount()

                record = req.profile_fields()
                record.update(
                    id=str(uuid.uuid4()),
                    email=req.email,
                    username=req.username,
                    password=await asyncio.to_thread(self.hasher.hash, req.password),
                )
                account = Account(**record)

                accounts[account.email] = account
                await self.store.save(accounts)

            token = self.issuer.issue(account.id)
        except AuthError:
            raise
        except Exception as exc:
            logger.exception("Signup failed for %s", req.username)
            raise InternalError(str(exc)) from exc

        logger.info("Registered user %s (%s)", account.username, account.id)
        return AuthResult(message="User created successfully", token=token, user_id=account.id)

    async def login(self, req: LoginRequest) -> AuthResult:
        """Check credentials for an email or username and issue a token."""
        try:
            accounts = await self.store.load()

            account = find_by_identifier(accounts, req.identifier)
            if account is None:
                raise AccountNotFound()

            if not await asyncio.to_thread(self.hasher.verify, req.password, account.password_hash):
                logger.info("Login failed, wrong password: %s", account.username)
                raise InvalidCredentials()

            token = self.issuer.issue(account.id)
        except AuthError:
            raise
        except Exception as exc:
            logger.exception("Login failed")
            raise InternalError(str(exc)) from exc

        logger.info("Login: %s (%s)", account.username, account.id)
        return AuthResult(message="Login successful", token=token, user_id=account.id)

    def authenticate(self, token: str) -> str:
        """Return the user id a bearer token asserts, or raise a ``TokenError``."""
        return self.issuer.verify_or_raise(token)
