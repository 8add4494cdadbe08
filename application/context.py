"""Explicit session context handed to the engine by its caller."""

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

from application.constants import SELLER_ROLE
from domain.errors import AuthenticationRequiredError
from infrastructure.constants import ENV_ROLE, ENV_TOKEN, ENV_USER_ID

logger = logging.getLogger(__name__)


class SessionContext(BaseModel):
    """Authentication token, role flag and seller id for the current user."""

    model_config = ConfigDict(frozen=True)

    token: str | None = None
    role: str | None = None
    user_id: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SessionContext":
        env = os.environ if environ is None else environ
        return cls(
            token=env.get(ENV_TOKEN) or None,
            role=env.get(ENV_ROLE) or None,
            user_id=env.get(ENV_USER_ID) or None,
        )

    @property
    def is_seller(self) -> bool:
        return bool(self.token) and self.role == SELLER_ROLE


def require_seller(context: SessionContext) -> None:
    """
    Precondition for reaching the form at all.

    Raises:
        AuthenticationRequiredError: If the token is missing or the role is not seller
    """
    if not context.is_seller:
        logger.warning("Rejected session without seller credentials (role=%s)", context.role or "-")
        raise AuthenticationRequiredError()
