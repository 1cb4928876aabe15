"""Adapter configuration model."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from core.utils.constants import (
    CLOUDFLARE_IMAGES_API_BASE_URL,
    DEFAULT_ID_PREFIX,
    DEFAULT_VARIANT,
    ENV_ACCOUNT_ID,
    ENV_API_BASE_URL,
    ENV_AUTH_TOKEN,
    ENV_CDN_BASE_URL,
    ENV_ID_PREFIX,
    ENV_OVERWRITE,
    ENV_VARIANT,
    IMAGES_API_PATH_TEMPLATE,
    TRUTHY_ENV_VALUES,
)


class AdapterConfig(BaseModel):
    """Settings for one storage adapter instance.

    Built once from the host's storage options and never mutated. Field
    aliases match the option keys the host passes (``accountId``,
    ``authToken``, ...); snake_case names are accepted as well.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    account_id: str = Field(..., alias="accountId", min_length=1)
    auth_token: SecretStr = Field(..., alias="authToken")
    cdn_base_url: str = Field(..., alias="cdnBaseUrl", min_length=1)
    variant: str = Field(DEFAULT_VARIANT, alias="variant", min_length=1)
    id_prefix: str = Field(DEFAULT_ID_PREFIX, alias="idPrefix")
    overwrite: bool = Field(False, alias="overwrite")
    api_base_url: str = Field(
        CLOUDFLARE_IMAGES_API_BASE_URL, alias="apiBaseUrl", min_length=1
    )

    @field_validator("account_id", "cdn_base_url", "variant", "api_base_url", mode="before")
    @classmethod
    def strip_whitespace(cls, value: object) -> object:
        # idPrefix is taken verbatim; it is part of every image key
        return value.strip() if isinstance(value, str) else value

    @field_validator("auth_token")
    @classmethod
    def validate_auth_token(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("authToken must not be empty")
        return value

    @field_validator("cdn_base_url", "api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def images_api_url(self) -> str:
        """Base URL of the account's Images API."""
        return IMAGES_API_PATH_TEMPLATE.format(
            base_url=self.api_base_url,
            account_id=self.account_id,
        )

    def image_api_url(self, image_id: str) -> str:
        """API URL addressing a single image."""
        return f"{self.images_api_url}/{image_id}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AdapterConfig":
        """Build configuration from ``CF_IMAGES_*`` environment variables.

        Args:
            environ: Mapping to read from, defaults to ``os.environ``

        Raises:
            pydantic.ValidationError: If required variables are missing
        """
        env = os.environ if environ is None else environ

        values: dict[str, object] = {
            "account_id": env.get(ENV_ACCOUNT_ID),
            "auth_token": env.get(ENV_AUTH_TOKEN),
            "cdn_base_url": env.get(ENV_CDN_BASE_URL),
            "variant": env.get(ENV_VARIANT),
            "id_prefix": env.get(ENV_ID_PREFIX),
            "api_base_url": env.get(ENV_API_BASE_URL),
        }

        overwrite = env.get(ENV_OVERWRITE)
        if overwrite is not None:
            values["overwrite"] = overwrite.strip().lower() in TRUTHY_ENV_VALUES

        # Unset optional variables fall back to model defaults
        optional = {"variant", "id_prefix", "api_base_url"}
        return cls(
            **{k: v for k, v in values.items() if v is not None or k not in optional}
        )
