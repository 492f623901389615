"""Project credentials read from the process environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from ampexport.constants import API_KEY_ENV, SECRET_KEY_ENV
from ampexport.export.errors import MissingCredentialsError

logger: Final = logging.getLogger(__name__)


class Credentials(BaseModel):
    """Amplitude project API key and secret key.

    Only ever sourced from the environment; the tool never persists them.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1, description="Project API key")
    secret_key: SecretStr = Field(..., description="Project secret key")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Credentials:
        """Read both credentials at invocation time.

        Args:
            environ: Mapping to read from (default: ``os.environ``)

        Returns:
            Credentials ready for basic auth

        Raises:
            MissingCredentialsError: If either variable is unset or empty
        """
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for field, variable in (("api_key", API_KEY_ENV), ("secret_key", SECRET_KEY_ENV)):
            value = env.get(variable, "")
            if not value:
                logger.error("Missing credential: %s", variable)
                raise MissingCredentialsError(variable)
            values[field] = value
        return cls.model_validate(values)

    def as_auth(self) -> tuple[str, str]:
        """Return the ``(user, password)`` pair for HTTP basic auth."""
        return self.api_key, self.secret_key.get_secret_value()
