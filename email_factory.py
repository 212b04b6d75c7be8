import logging
from typing import Any, Dict, Optional
from senders.base_sender import BaseSender
from senders.mock_senders import MockSender
from senders.zeptomail_sender import ZeptoMailSender
from settings import ZeptoMailSettings

logger = logging.getLogger("zeptomail_transport")

class EmailFactory:
    @staticmethod
    def get_sender(provider: str, credentials_json: Optional[Dict[str, Any]] = None) -> BaseSender:
        """
        provider: zeptomail or mock
        credentials_json: overrides for ZEPTOMAIL_* settings (api_key, endpoint, ...)
        """
        provider = provider.lower()
        settings = ZeptoMailSettings.from_env(credentials_json)
        if provider == "zeptomail":
            sender = ZeptoMailSender(settings)
        elif provider == "mock":
            sender = MockSender(settings)
        else:
            raise ValueError(f"Unsupported provider: {provider}")

        logger.info(f"Sender initialized: {provider} ({settings.endpoint})")
        return sender
