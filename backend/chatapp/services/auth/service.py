# chatapp/services/auth/service.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from chatapp.repositories.user import UserRepository
from chatapp.services._shared.base import BaseService
from chatapp.services._shared.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ServiceError,
    violates,
)
from chatapp.services._shared.ports import (
    Credentialed,
    TokenRegistry,
    TokenSigner,
    UserLookup,
)
from chatapp.services.auth.dto import AuthTokenConfig, LoginIn, LoginOut, RegisterIn
from chatapp.services.auth.tokens import Token, TokenKind, utcnow
from chatapp.services.users.dto import UserPublicOut

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Principal:
    id: int
    name: str
    email: str
    subject: str


class AuthService(BaseService):
    """
    Authentication service (login / register / whoami).

    Login issues a session pair: one access and one refresh token, both
    registered in the token registry before they are signed and handed out.

    :param registry: Authoritative token store shared with the authenticator.
    :param signer: Adapter turning token records into signed strings.
    :param token_cfg: Access/refresh lifetimes.
    :param user_lookup: Optional account lookup. Defaults to the
        :class:`UserRepository` of a read-only unit of work.
    """

    def __init__(
        self,
        *,
        registry: TokenRegistry,
        signer: TokenSigner,
        token_cfg: AuthTokenConfig,
        user_lookup: UserLookup | None = None,
    ) -> None:
        self.registry = registry
        self.signer = signer
        self.cfg = token_cfg
        self.user_lookup = user_lookup

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue a fresh session pair.

        Nothing reaches the registry unless the credentials check out.

        :param dto: Login input.
        :returns: Account identity plus signed access/refresh tokens.
        :raises InvalidCredentialsError: Unknown email or password mismatch.
        :raises TokenSigningError: If a token cannot be signed.
        """
        principal = self._verify_credentials(dto)

        now = utcnow()
        access = Token.issue(
            kind=TokenKind.ACCESS,
            subject=principal.subject,
            lifetime=self.cfg.access_expires,
            now=now,
        )
        refresh = Token.issue(
            kind=TokenKind.REFRESH,
            subject=principal.subject,
            lifetime=self.cfg.refresh_expires,
            now=now,
        )
        self.registry.put(access)
        self.registry.put(refresh)

        out = LoginOut(
            id=principal.id,
            name=principal.name,
            email=principal.email,
            access_token=self.signer.sign(access),
            refresh_token=self.signer.sign(refresh),
        )
        log.info(
            "Session pair issued",
            extra={"event": "auth.login", "subject": principal.subject},
        )
        return out

    def _verify_credentials(self, dto: LoginIn) -> _Principal:
        if self.user_lookup is not None:
            return self._check(self.user_lookup.get_by_email(dto.email), dto)

        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            return self._check(repo.get_by_email(dto.email), dto)

    @staticmethod
    def _check(user: Credentialed | None, dto: LoginIn) -> _Principal:
        # Both failures look the same to the caller; only the log differs.
        if user is None:
            log.warning(
                "Login rejected: unknown email",
                extra={"event": "auth.login_failed", "reason": "unknown_email"},
            )
            raise InvalidCredentialsError()
        if not user.verify_password(dto.password):
            log.warning(
                "Login rejected: password mismatch",
                extra={"event": "auth.login_failed", "reason": "password_mismatch"},
            )
            raise InvalidCredentialsError()
        return _Principal(id=user.id, name=user.name, email=user.email, subject=user.subject)

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> UserPublicOut:
        """
        Create an account through the public sign-up endpoint.

        :raises ConflictError: When the email is already in use.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.exists_by_email(dto.email):
                raise ConflictError("User", "email already in use")
            try:
                user = repo.add(repo.model(name=dto.name, email=dto.email, password=dto.password))
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", "email already in use") from exc
                raise
            return UserPublicOut.from_model(user)

    # ------------------------------------------------------------------ #
    # Identity
    # ------------------------------------------------------------------ #

    def whoami(self, subject: str) -> UserPublicOut:
        """
        Resolve an authenticated token subject to its account.

        :raises NotFoundError: When the account was deleted after login.
        """
        try:
            user_id = int(subject)
        except ValueError as exc:
            raise NotFoundError("User", subject) from exc

        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserPublicOut.from_model(user)
