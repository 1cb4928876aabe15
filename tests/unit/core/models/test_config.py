"""
Unit tests for core.models.config
"""

import pytest
from pydantic import ValidationError

from core.models.config import AdapterConfig
from core.utils.constants import (
    ENV_ACCOUNT_ID,
    ENV_AUTH_TOKEN,
    ENV_CDN_BASE_URL,
    ENV_ID_PREFIX,
    ENV_OVERWRITE,
    ENV_VARIANT,
)


class TestAdapterConfig:
    def test_from_host_options(self, adapter_options) -> None:
        config = AdapterConfig.model_validate(adapter_options)

        assert config.account_id == "acc_123"
        assert config.auth_token.get_secret_value() == "token-secret"
        assert config.cdn_base_url == "https://imagedelivery.net/hash123"
        assert config.variant == "public"
        assert config.id_prefix == "blog/"
        assert config.overwrite is False

    def test_accepts_field_names(self) -> None:
        config = AdapterConfig(
            account_id="acc",
            auth_token="tok",
            cdn_base_url="https://cdn.example.com/",
        )

        assert config.cdn_base_url == "https://cdn.example.com"
        assert config.variant == "public"
        assert config.id_prefix == ""
        assert config.overwrite is False

    def test_images_api_url(self, adapter_config) -> None:
        assert (
            adapter_config.images_api_url
            == "https://api.cloudflare.com/client/v4/accounts/acc_123/images/v1"
        )
        assert adapter_config.image_api_url("blog/cat.jpg").endswith(
            "/accounts/acc_123/images/v1/blog/cat.jpg"
        )

    def test_custom_api_base_url(self, adapter_options) -> None:
        config = AdapterConfig.model_validate(
            {**adapter_options, "apiBaseUrl": "http://localhost:8787/client/v4/"}
        )

        assert config.images_api_url == "http://localhost:8787/client/v4/accounts/acc_123/images/v1"

    def test_token_not_exposed(self, adapter_config) -> None:
        assert "token-secret" not in repr(adapter_config)
        assert "token-secret" not in str(adapter_config.model_dump())

    def test_is_immutable(self, adapter_config) -> None:
        with pytest.raises(ValidationError):
            adapter_config.overwrite = True

    @pytest.mark.parametrize("missing", ["accountId", "authToken", "cdnBaseUrl"])
    def test_missing_required_option(self, adapter_options, missing) -> None:
        adapter_options.pop(missing)

        with pytest.raises(ValidationError):
            AdapterConfig.model_validate(adapter_options)

    def test_blank_token_rejected(self, adapter_options) -> None:
        with pytest.raises(ValidationError):
            AdapterConfig.model_validate({**adapter_options, "authToken": "   "})

    def test_id_prefix_kept_verbatim(self, adapter_options) -> None:
        config = AdapterConfig.model_validate({**adapter_options, "idPrefix": " blog/ "})

        assert config.id_prefix == " blog/ "

    def test_other_values_are_trimmed(self, adapter_options) -> None:
        config = AdapterConfig.model_validate(
            {
                **adapter_options,
                "accountId": " acc_123 ",
                "cdnBaseUrl": " https://cdn.example.com/ ",
            }
        )

        assert config.account_id == "acc_123"
        assert config.cdn_base_url == "https://cdn.example.com"

    def test_blank_variant_rejected(self, adapter_options) -> None:
        with pytest.raises(ValidationError):
            AdapterConfig.model_validate({**adapter_options, "variant": "  "})


class TestAdapterConfigFromEnv:
    def test_reads_environment(self) -> None:
        config = AdapterConfig.from_env(
            {
                ENV_ACCOUNT_ID: "acc_env",
                ENV_AUTH_TOKEN: "tok_env",
                ENV_CDN_BASE_URL: "https://cdn.example.com",
                ENV_VARIANT: "thumb",
                ENV_ID_PREFIX: "tenant-a/",
                ENV_OVERWRITE: "True",
            }
        )

        assert config.account_id == "acc_env"
        assert config.variant == "thumb"
        assert config.id_prefix == "tenant-a/"
        assert config.overwrite is True

    def test_optional_values_default(self) -> None:
        config = AdapterConfig.from_env(
            {
                ENV_ACCOUNT_ID: "acc_env",
                ENV_AUTH_TOKEN: "tok_env",
                ENV_CDN_BASE_URL: "https://cdn.example.com",
                ENV_OVERWRITE: "no",
            }
        )

        assert config.variant == "public"
        assert config.id_prefix == ""
        assert config.overwrite is False

    def test_uses_os_environ(self, monkeypatch) -> None:
        monkeypatch.setenv(ENV_ACCOUNT_ID, "acc_os")
        monkeypatch.setenv(ENV_AUTH_TOKEN, "tok_os")
        monkeypatch.setenv(ENV_CDN_BASE_URL, "https://cdn.example.com")

        assert AdapterConfig.from_env().account_id == "acc_os"

    def test_missing_account_raises(self) -> None:
        with pytest.raises(ValidationError):
            AdapterConfig.from_env({ENV_AUTH_TOKEN: "tok"})
