"""
Control signals: per-send instructions that travel either as explicit
SendOptions or as private X-Zepto-* headers on the message.

Resolution order for every signal is explicit option, then header, then
the configured default. Headers named here never reach `mime_headers`.
"""

import json
import logging
from typing import Any, Dict, Optional

from models.message import EmailMessage
from models.send_options import ResolvedOptions, SendOptions, TemplateKind, TemplateRef
from settings import ZeptoMailSettings

logger = logging.getLogger("zeptomail_transport")

TEMPLATE_HEADER = "X-Zepto-Template"
MERGE_INFO_HEADER = "X-Zepto-MergeInfo"
PER_RECIPIENT_MERGE_INFO_HEADER = "X-Zepto-PerRecipient-MergeInfo"
BATCH_HEADER = "X-Zepto-Batch"
TRACK_OPENS_HEADER = "X-Zepto-Track-Opens"
TRACK_CLICKS_HEADER = "X-Zepto-Track-Clicks"
CLIENT_REFERENCE_HEADER = "X-Zepto-Client-Reference"
BOUNCE_ADDRESS_HEADER = "X-Zepto-Bounce-Address"

CONTROL_HEADERS = frozenset({
    TEMPLATE_HEADER, MERGE_INFO_HEADER, PER_RECIPIENT_MERGE_INFO_HEADER,
    BATCH_HEADER, TRACK_OPENS_HEADER, TRACK_CLICKS_HEADER,
    CLIENT_REFERENCE_HEADER, BOUNCE_ADDRESS_HEADER,
})

# Written back onto a message after a successful send; reporting only.
RESPONSE_HEADER = "X-Zepto-Response"
REQUEST_HEADERS_HEADER = "X-Zepto-Request-Headers"
REPORTING_HEADERS = frozenset({RESPONSE_HEADER, REQUEST_HEADERS_HEADER})

TRUTHY = frozenset({"1", "true", "yes", "on"})
FALSY = frozenset({"0", "false", "no", "off", ""})


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """True/False for recognised tokens, None for anything else."""
    if value is None:
        return None
    token = value.strip().lower()
    if token in TRUTHY:
        return True
    if token in FALSY:
        return False
    return None


def is_truthy(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in TRUTHY


def decode_json_object(raw: Optional[str], header_name: str = "") -> Optional[Dict[str, Any]]:
    """
    Decodes a JSON object. Invalid JSON or a non-object value counts as absent.
    """
    if raw is None:
        return None
    try:
        decoded = json.loads(raw)
    except ValueError:
        logger.warning(f"Ignoring {header_name or 'control header'}: value is not valid JSON")
        return None
    if not isinstance(decoded, dict):
        logger.warning(f"Ignoring {header_name or 'control header'}: expected a JSON object")
        return None
    return decoded


def _trimmed_header(message: EmailMessage, name: str) -> Optional[str]:
    value = message.get_header(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def options_from_headers(message: EmailMessage) -> SendOptions:
    """Reads the legacy X-Zepto-* header channel into a SendOptions."""
    template_id = _trimmed_header(message, TEMPLATE_HEADER)

    return SendOptions(
        template=TemplateRef(identifier=template_id) if template_id else None,
        merge_info=decode_json_object(message.get_header(MERGE_INFO_HEADER), MERGE_INFO_HEADER),
        per_recipient_merge_info=decode_json_object(
            message.get_header(PER_RECIPIENT_MERGE_INFO_HEADER), PER_RECIPIENT_MERGE_INFO_HEADER
        ),
        batch=is_truthy(message.get_header(BATCH_HEADER)),
        track_opens=parse_bool(message.get_header(TRACK_OPENS_HEADER)),
        track_clicks=parse_bool(message.get_header(TRACK_CLICKS_HEADER)),
        client_reference=_trimmed_header(message, CLIENT_REFERENCE_HEADER),
        bounce_address=_trimmed_header(message, BOUNCE_ADDRESS_HEADER),
    )


def _template_from_settings(settings: ZeptoMailSettings) -> Optional[TemplateRef]:
    key = (settings.template_key or "").strip()
    alias = (settings.template_alias or "").strip()
    if key:
        return TemplateRef(identifier=key, kind=TemplateKind.KEY)
    if alias:
        return TemplateRef(identifier=alias, kind=TemplateKind.ALIAS)
    return None


def _first(*values):
    return next((v for v in values if v is not None and v != ""), None)


def resolve_options(
    message: EmailMessage,
    options: Optional[SendOptions] = None,
    settings: Optional[ZeptoMailSettings] = None,
) -> ResolvedOptions:
    explicit = options or SendOptions()
    from_headers = options_from_headers(message)
    settings = settings or ZeptoMailSettings()

    per_recipient = explicit.per_recipient_merge_info or from_headers.per_recipient_merge_info or {}

    # Batch: explicit opt-in, then force_batch, then implied by per-recipient merge data
    if explicit.batch or from_headers.batch:
        batch = True
    elif settings.force_batch:
        batch = True
    else:
        batch = bool(per_recipient)

    return ResolvedOptions(
        template=explicit.template or from_headers.template or _template_from_settings(settings),
        merge_info=explicit.merge_info or from_headers.merge_info or {},
        per_recipient_merge_info=per_recipient,
        batch=batch,
        track_opens=_first(explicit.track_opens, from_headers.track_opens, settings.track_opens),
        track_clicks=_first(explicit.track_clicks, from_headers.track_clicks, settings.track_clicks),
        client_reference=_first(explicit.client_reference, from_headers.client_reference, settings.client_reference),
        bounce_address=_first(explicit.bounce_address, from_headers.bounce_address, settings.bounce_address),
    )
