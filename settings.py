import os
from typing import Any, Dict, Optional
from pydantic import BaseModel, field_validator
from senders.errors import ZeptoConfigurationError


DEFAULT_ENDPOINT = "https://api.zeptomail.com"

ENV_VARS = {
    "api_key": "ZEPTOMAIL_MAIL_KEY",
    "endpoint": "ZEPTOMAIL_ENDPOINT",
    "timeout": "ZEPTOMAIL_TIMEOUT",
    "retries": "ZEPTOMAIL_RETRIES",
    "retry_sleep_ms": "ZEPTOMAIL_RETRY_SLEEP_MS",
    "template_key": "ZEPTOMAIL_TEMPLATE_KEY",
    "template_alias": "ZEPTOMAIL_TEMPLATE_ALIAS",
    "bounce_address": "ZEPTOMAIL_BOUNCE_ADDRESS",
    "track_opens": "ZEPTOMAIL_TRACK_OPENS",
    "track_clicks": "ZEPTOMAIL_TRACK_CLICKS",
    "client_reference": "ZEPTOMAIL_CLIENT_REFERENCE",
    "force_batch": "ZEPTOMAIL_FORCE_BATCH",
}

class ZeptoMailSettings(BaseModel):
    api_key: str = ""
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = 30
    retries: int = 2
    retry_sleep_ms: int = 200

    # Defaults applied when a message does not say otherwise
    template_key: Optional[str] = None
    template_alias: Optional[str] = None
    bounce_address: Optional[str] = None
    track_opens: Optional[bool] = None
    track_clicks: Optional[bool] = None
    client_reference: Optional[str] = None
    force_batch: bool = False

    @field_validator("template_key", "template_alias", "bounce_address", "client_reference", mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @classmethod
    def from_env(cls, overrides: Optional[Dict[str, Any]] = None) -> "ZeptoMailSettings":
        """
        Builds settings from ZEPTOMAIL_* environment variables.
        Non-empty values in `overrides` (e.g. an engine's credentials_json) win.
        """
        values: Dict[str, Any] = {}
        for field, env_name in ENV_VARS.items():
            raw = os.getenv(env_name)
            if raw is not None and raw.strip() != "":
                values[field] = raw.strip()

        for key, value in (overrides or {}).items():
            if key in cls.model_fields and value is not None and value != "":
                values[key] = value

        return cls(**values)

    def require_api_key(self) -> str:
        if not self.api_key or not self.api_key.strip():
            raise ZeptoConfigurationError(
                "ZeptoMail driver misconfigured: mail key is empty. "
                "Pass 'api_key' in the engine credentials or set ZEPTOMAIL_MAIL_KEY."
            )
        return self.api_key
