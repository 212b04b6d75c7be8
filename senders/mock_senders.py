from .base_sender import BaseSender
from typing import List, Optional
import uuid
import logging
from mapper.payload_mapper import PayloadMapper
from models.dispatch import DispatchResult, ZeptoRequest
from models.message import EmailMessage
from models.send_options import SendOptions
from settings import ZeptoMailSettings

logger = logging.getLogger("zeptomail_transport")

class MockSender(BaseSender):
    """Maps messages exactly like the real sender but never touches the network."""

    def __init__(self, settings: Optional[ZeptoMailSettings] = None):
        self.mapper = PayloadMapper(settings or ZeptoMailSettings())
        self.sent: List[ZeptoRequest] = []

    def preview(self, message: EmailMessage, options: Optional[SendOptions] = None) -> ZeptoRequest:
        return self.mapper.map(message, options)

    def send(self, message: EmailMessage, options: Optional[SendOptions] = None) -> DispatchResult:
        request = self.preview(message, options)
        self.sent.append(request)
        logger.info(f"[MOCK] POST {request.path}")
        logger.info(f"   From: {request.payload.get('from')}")
        logger.info(f"   Subject: {request.payload.get('subject')}")
        return DispatchResult(
            path=request.path,
            response={
                "data": [{"code": "EM_104", "additional_info": [], "message": "Email request received"}],
                "message": "OK",
                "request_id": f"mock-{uuid.uuid4().hex}",
                "object": "email",
            },
            request_headers={"Accept": "application/json", "Content-Type": "application/json"},
        )
