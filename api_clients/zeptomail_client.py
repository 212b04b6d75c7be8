import logging
from typing import Any, Dict

import requests

from api_clients.base_client import BaseClient
from models.dispatch import DispatchResult
from senders.errors import (
    ZeptoApiError,
    ZeptoConfigurationError,
    ZeptoHttpError,
    ZeptoTransportError,
)
from settings import DEFAULT_ENDPOINT, ZeptoMailSettings
from utils.redaction import redact_headers
from utils.retry import RetryManager

logger = logging.getLogger("zeptomail_transport")

AUTH_SCHEME = "Zoho-enczapikey"

class ZeptoMailClient(BaseClient):
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_ENDPOINT,
        timeout: float = 30,
        retries: int = 2,
        retry_sleep_ms: int = 200,
    ):
        if not api_key or not api_key.strip():
            raise ZeptoConfigurationError("ZeptoMail driver misconfigured: mail key is empty.")

        super().__init__(base_url or DEFAULT_ENDPOINT, timeout)
        self.api_key = api_key
        self.max_attempts = max(1, int(retries))
        self.retry_delay = max(0, int(retry_sleep_ms)) / 1000.0

    @classmethod
    def from_settings(cls, settings: ZeptoMailSettings) -> "ZeptoMailClient":
        return cls(
            api_key=settings.require_api_key(),
            base_url=settings.endpoint,
            timeout=settings.timeout,
            retries=settings.retries,
            retry_sleep_ms=settings.retry_sleep_ms,
        )

    def request_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"{AUTH_SCHEME} {self.api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def send(self, path: str, payload: Dict[str, Any]) -> DispatchResult:
        """
        POSTs the payload and classifies the outcome.

        Raises ZeptoTransportError when the network fails on every attempt,
        ZeptoHttpError for a non-2xx status, and ZeptoApiError when a 2xx
        body still carries an `error` object.
        """
        headers = self.request_headers()
        logger.info(f"POST {self.base_url}{path} headers={redact_headers(headers)}")

        post = RetryManager.with_retry(
            max_attempts=self.max_attempts,
            delay_seconds=self.retry_delay,
            retry_on=(requests.RequestException, ZeptoHttpError),
        )(self._attempt)

        try:
            response = post(path, payload, headers)
        except requests.RequestException as e:
            logger.error(f"ZeptoMail request to {path} failed: {e}")
            raise ZeptoTransportError(f"Network error calling ZeptoMail {path}: {e}") from e

        body = self._parse_body(response)
        if "error" in body:
            logger.error(f"ZeptoMail rejected request to {path}: {body['error']}")
            raise ZeptoApiError(body, status_code=response.status_code)

        logger.info(f"ZeptoMail accepted request to {path} (request_id={body.get('request_id')})")
        return DispatchResult(path=path, response=body, request_headers=headers)

    def _attempt(self, path: str, payload: Dict[str, Any], headers: Dict[str, str]) -> requests.Response:
        response = self._post(path, json=payload, headers=headers)
        if not 200 <= response.status_code < 300:
            logger.warning(f"ZeptoMail error: {response.status_code} - {response.text}")
            raise ZeptoHttpError(response.status_code, response.text)
        return response

    @staticmethod
    def _parse_body(response: requests.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
