# chatapp/services/_shared/base.py
from __future__ import annotations

from chatapp.core import errors as api_errors
from chatapp.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    TokenSigningError,
    WrongTokenKindError,
)
from chatapp.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation.

    Notes
    -----
    Services never touch the global session directly; they go through a
    Unit of Work.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork()

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :returns: Translated exception ready to be re-raised.
        """
        if isinstance(exc, WrongTokenKindError):
            return api_errors.Unauthorized(exc.public_message, code="wrong_token_kind")

        if isinstance(exc, AuthenticationError):
            # → 401; the reason stays in the logs only
            return api_errors.Unauthorized(exc.public_message)

        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))

        if isinstance(exc, TokenSigningError):
            return api_errors.InternalError()

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")

        # Fallback: return untouched (will bubble up to the Flask handler)
        return exc
