"""
Converts a composed stdlib email message into the EmailMessage model.

Addressing headers become address lists, the first text/html and text/plain
parts that are not attachments become the bodies, and every other leaf part
becomes an Attachment. Top-level headers are kept in order, duplicates
included, so the mapper can pick out control headers and pass the rest on.
"""

import email
import logging
from email import policy
from email.message import EmailMessage as MIMEMessage, Message
from email.utils import getaddresses
from typing import List

from models.address import Address
from models.message import Attachment, EmailMessage, Header

logger = logging.getLogger("zeptomail_transport")


def _addresses(msg: Message, name: str) -> List[Address]:
    values = [str(v) for v in msg.get_all(name, [])]
    return [Address(address=addr, name=display or None) for display, addr in getaddresses(values) if addr]


def _text(part: Message) -> str:
    try:
        return part.get_content()
    except (LookupError, AttributeError):
        payload = part.get_payload(decode=True) or b""
        return payload.decode(part.get_content_charset() or "utf-8", errors="replace")


def message_from_mime(msg: Message) -> EmailMessage:
    if not isinstance(msg, MIMEMessage):
        msg = email.message_from_bytes(msg.as_bytes(), policy=policy.default)

    senders = _addresses(msg, "From")
    result = EmailMessage(
        sender=senders[0] if senders else None,
        to=_addresses(msg, "To"),
        cc=_addresses(msg, "Cc"),
        bcc=_addresses(msg, "Bcc"),
        reply_to=_addresses(msg, "Reply-To"),
        subject=str(msg["Subject"]) if msg["Subject"] is not None else None,
        headers=[Header(name=name, value=str(value)) for name, value in msg.items()],
    )

    for part in msg.walk():
        if part.is_multipart():
            continue

        content_type = part.get_content_type()
        disposition = part.get_content_disposition()
        filename = part.get_filename()
        content_id = part.get("Content-ID")
        is_body_candidate = disposition != "attachment" and not filename and not content_id

        if is_body_candidate and content_type == "text/html" and result.html_body is None:
            result.html_body = _text(part)
            continue
        if is_body_candidate and content_type == "text/plain" and result.text_body is None:
            result.text_body = _text(part)
            continue

        result.attachments.append(Attachment(
            content=part.get_payload(decode=True) or b"",
            mime_type=content_type,
            filename=filename,
            content_id=str(content_id) if content_id else None,
            disposition=disposition,
        ))

    logger.debug(f"Converted MIME message with {len(result.attachments)} attachment(s)")
    return result
