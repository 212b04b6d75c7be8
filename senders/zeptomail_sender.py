import json
import logging
from typing import Optional

from api_clients.zeptomail_client import ZeptoMailClient
from mapper.control_signals import REQUEST_HEADERS_HEADER, RESPONSE_HEADER
from mapper.payload_mapper import PayloadMapper
from models.dispatch import DispatchResult, ZeptoRequest
from models.message import EmailMessage
from models.send_options import SendOptions
from senders.base_sender import BaseSender
from settings import ZeptoMailSettings
from utils.redaction import redact_headers

logger = logging.getLogger("zeptomail_transport")

class ZeptoMailSender(BaseSender):
    def __init__(self, settings: ZeptoMailSettings, client: Optional[ZeptoMailClient] = None):
        self.settings = settings
        # Fails here, not on first send, when the key is missing
        self.client = client or ZeptoMailClient.from_settings(settings)
        self.mapper = PayloadMapper(settings)

    def __str__(self) -> str:
        return "zeptomail"

    def preview(self, message: EmailMessage, options: Optional[SendOptions] = None) -> ZeptoRequest:
        return self.mapper.map(message, options)

    def send(self, message: EmailMessage, options: Optional[SendOptions] = None) -> DispatchResult:
        """
        Sends one message through the matching ZeptoMail endpoint.

        On success the response body and the (redacted) request headers are
        recorded on the message as X-Zepto-Response / X-Zepto-Request-Headers.
        Errors propagate as ZeptoSendError subclasses.
        """
        request = self.mapper.map(message, options)
        recipients = len(message.to) + len(message.cc) + len(message.bcc)
        logger.info(f"Sending via ZeptoMail {request.path} to {recipients} recipient(s)")

        result = self.client.send(request.path, request.payload)
        self.store_response_in_message(message, result)
        return result

    @staticmethod
    def store_response_in_message(message: EmailMessage, result: DispatchResult) -> None:
        message.add_header(RESPONSE_HEADER, json.dumps(result.response))
        message.add_header(REQUEST_HEADERS_HEADER, json.dumps(redact_headers(result.request_headers)))
