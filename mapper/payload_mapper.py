import base64
import logging
from typing import Any, Dict, List, Optional, Tuple

from models.address import Address
from models.dispatch import ZeptoRequest
from models.message import Attachment, EmailMessage
from models.send_options import ResolvedOptions, SendOptions
from mapper.control_signals import CONTROL_HEADERS, REPORTING_HEADERS, resolve_options
from settings import ZeptoMailSettings

logger = logging.getLogger("zeptomail_transport")

SINGLE_ENDPOINT = "/v1.1/email"
BATCH_ENDPOINT = "/v1.1/email/batch"
TEMPLATE_ENDPOINT = "/v1.1/email/template"
TEMPLATE_BATCH_ENDPOINT = "/v1.1/email/template/batch"

STANDARD_HEADERS = frozenset({
    "From", "To", "Cc", "Bcc", "Reply-To", "Subject",
    "MIME-Version", "Content-Type", "Content-Transfer-Encoding",
})

EXCLUDED_HEADERS = STANDARD_HEADERS | CONTROL_HEADERS | REPORTING_HEADERS


def select_endpoint(templated: bool, batch: bool) -> str:
    if templated:
        return TEMPLATE_BATCH_ENDPOINT if batch else TEMPLATE_ENDPOINT
    return BATCH_ENDPOINT if batch else SINGLE_ENDPOINT


class PayloadMapper:
    """
    Turns an EmailMessage plus its control signals into the endpoint path
    and JSON body for one of ZeptoMail's four send APIs:

        single   POST /v1.1/email
        batch    POST /v1.1/email/batch
        template POST /v1.1/email/template
        both     POST /v1.1/email/template/batch

    Unset fields are left out of the payload rather than sent empty.
    """

    def __init__(self, settings: Optional[ZeptoMailSettings] = None):
        self.settings = settings or ZeptoMailSettings()

    def map(self, message: EmailMessage, options: Optional[SendOptions] = None) -> ZeptoRequest:
        resolved = resolve_options(message, options, self.settings)
        payload = self.build_common_payload(message)

        reply_to = self.map_reply_to(message.reply_to)
        if reply_to:
            payload["reply_to"] = reply_to

        attachments, inline_images = self.map_attachments(message.attachments)
        if attachments:
            payload["attachments"] = attachments
        if inline_images:
            payload["inline_images"] = inline_images

        self.apply_flags_and_reference(resolved, payload)

        mime_headers = self.extract_custom_headers(message)
        if mime_headers:
            payload["mime_headers"] = mime_headers

        # Per-recipient merge data only rides along on batch sends
        to = self.map_to_with_merge(message.to, resolved.per_recipient_merge_info if resolved.batch else {})
        cc = self.map_addresses(message.cc)
        bcc = self.map_addresses(message.bcc)
        if to:
            payload["to"] = to
        if cc:
            payload["cc"] = cc
        if bcc:
            payload["bcc"] = bcc

        if resolved.templated:
            payload.update(resolved.template.to_payload())
            if resolved.merge_info:
                payload["merge_info"] = resolved.merge_info
            if resolved.bounce_address:
                payload["bounce_address"] = resolved.bounce_address

        path = select_endpoint(resolved.templated, resolved.batch)
        logger.debug(f"Mapped message to {path} (batch={resolved.batch}, templated={resolved.templated})")
        return ZeptoRequest(path=path, payload=payload, batch=resolved.batch, templated=resolved.templated)

    def build_common_payload(self, message: EmailMessage) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if message.sender:
            payload["from"] = message.sender.to_payload()
        if message.subject:
            payload["subject"] = message.subject
        # ZeptoMail needs htmlbody or textbody; both are sent when present
        if message.html_body:
            payload["htmlbody"] = message.html_body
        if message.text_body:
            payload["textbody"] = message.text_body
        return payload

    @staticmethod
    def map_addresses(addresses: List[Address]) -> List[Dict[str, Any]]:
        return [{"email_address": a.to_payload()} for a in addresses]

    @staticmethod
    def map_to_with_merge(addresses: List[Address], per_recipient: Dict[str, Any]) -> List[Dict[str, Any]]:
        items = []
        for a in addresses:
            item: Dict[str, Any] = {"email_address": a.to_payload()}
            merge = per_recipient.get(a.address)
            if isinstance(merge, dict):
                item["merge_info"] = merge
            items.append(item)
        return items

    @staticmethod
    def map_reply_to(addresses: List[Address]) -> List[Dict[str, Any]]:
        # Not wrapped in email_address, unlike to/cc/bcc
        return [a.to_payload() for a in addresses]

    @staticmethod
    def map_attachments(parts: List[Attachment]) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
        attachments = []
        inline_images = []
        for part in parts:
            entry: Dict[str, Any] = {
                "content": base64.b64encode(part.content).decode("ascii"),
                "mime_type": part.mime_type,
            }
            if part.filename:
                entry["name"] = part.filename

            if part.is_inline:
                cid = (part.content_id or "").strip().strip("<>")
                if cid:
                    entry["cid"] = cid
                inline_images.append(entry)
            else:
                attachments.append(entry)
        return attachments, inline_images

    @staticmethod
    def apply_flags_and_reference(resolved: ResolvedOptions, payload: Dict[str, Any]) -> None:
        if resolved.track_opens is not None:
            payload["track_opens"] = bool(resolved.track_opens)
        if resolved.track_clicks is not None:
            payload["track_clicks"] = bool(resolved.track_clicks)
        if resolved.client_reference:
            payload["client_reference"] = str(resolved.client_reference)

    @staticmethod
    def extract_custom_headers(message: EmailMessage) -> Dict[str, str]:
        pairs: Dict[str, str] = {}
        for header in message.headers:
            if header.name in EXCLUDED_HEADERS:
                continue
            value = header.value.strip()
            if not value:
                continue
            if header.name in pairs:
                pairs[header.name] += ", " + value
            else:
                pairs[header.name] = value
        return pairs
