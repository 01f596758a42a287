"""
AdminGate — admin access through a pluggable Authenticator.

No credential is stored here; deciding who is an admin belongs to the
identity service behind the Authenticator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from kungfu import LazyCoroResult, Result, Ok, Error
from combinators import lift as L

from storefront._errors import RemoteWriteError, ValidationError
from storefront._observable import Observable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AdminSession:
    subject: str


class Authenticator(Protocol):
    """
    Credential check.

    Example:
        class TokenService:
            async def authenticate(self, credential: str) -> AdminSession | None:
                claims = await identity.verify(credential)
                return AdminSession(claims.sub) if claims.is_admin else None
    """

    async def authenticate(self, credential: str) -> AdminSession | None: ...


class AdminGate(Observable):
    def __init__(self, authenticator: Authenticator) -> None:
        super().__init__()
        self._authenticator = authenticator
        self._session: AdminSession | None = None

    @property
    def session(self) -> AdminSession | None:
        return self._session

    @property
    def authenticated(self) -> bool:
        return self._session is not None

    def login(self, credential: str) -> LazyCoroResult[AdminSession, ValidationError | RemoteWriteError]:
        """An authenticator that raises yields RemoteWriteError("authenticate", ...)."""
        check = L.catching_async(
            lambda: self._authenticator.authenticate(credential),
            on_error=lambda e: RemoteWriteError("authenticate", str(e) or type(e).__name__),
        )

        async def execute() -> Result[AdminSession, ValidationError | RemoteWriteError]:
            if not credential:
                return Error(ValidationError("credential", "Credential is required"))
            checked = await check
            if isinstance(checked, Error):
                logger.error("Admin login failed: %s", checked.error)
                return checked
            session = checked.value
            if session is None:
                logger.warning("Admin login rejected")
                return Error(ValidationError("credential", "Invalid credential"))
            self._session = session
            logger.info("Admin %s logged in", session.subject)
            self._notify()
            return Ok(session)

        return LazyCoroResult(execute)

    def logout(self) -> None:
        if self._session is None:
            return
        logger.info("Admin %s logged out", self._session.subject)
        self._session = None
        self._notify()

    def require(self) -> Result[AdminSession, ValidationError]:
        if self._session is None:
            return Error(ValidationError("credential", "Admin login required"))
        return Ok(self._session)


__all__ = ("AdminSession", "Authenticator", "AdminGate")
