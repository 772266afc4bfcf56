# chatapp/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from flask import current_app

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for public sign-up.

    :param name: Display name.
    :param email: Login email (normalized by the model).
    :param password: Raw password, hashed by the model setter.
    """

    name: str
    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO for a successful login: the account plus its session pair.

    :param id: User id.
    :param name: Display name.
    :param email: Login email.
    :param access_token: Signed access token.
    :param refresh_token: Signed refresh token.
    """

    id: int
    name: str
    email: str
    access_token: str
    refresh_token: str


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_expires: timedelta
    refresh_expires: timedelta

    @classmethod
    def from_app(cls) -> AuthTokenConfig:
        """Read lifetimes (seconds) from the current application config."""
        cfg = current_app.config
        return cls(
            access_expires=timedelta(seconds=int(cfg["ACCESS_TOKEN_EXPIRES"])),
            refresh_expires=timedelta(seconds=int(cfg["REFRESH_TOKEN_EXPIRES"])),
        )
