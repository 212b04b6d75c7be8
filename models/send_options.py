from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any
from enum import Enum

# Template keys issued by ZeptoMail start with this prefix; anything else is an alias.
TEMPLATE_KEY_PREFIX = "ea"

class TemplateKind(str, Enum):
    KEY = "key"
    ALIAS = "alias"

class TemplateRef(BaseModel):
    identifier: str
    kind: Optional[TemplateKind] = None

    @field_validator("identifier")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Template identifier must not be empty")
        return value

    @staticmethod
    def infer_kind(identifier: str) -> TemplateKind:
        return TemplateKind.KEY if identifier.startswith(TEMPLATE_KEY_PREFIX) else TemplateKind.ALIAS

    def resolved_kind(self) -> TemplateKind:
        return self.kind or self.infer_kind(self.identifier)

    def to_payload(self) -> Dict[str, str]:
        field = "template_key" if self.resolved_kind() == TemplateKind.KEY else "template_alias"
        return {field: self.identifier}

class SendOptions(BaseModel):
    """Per-send instructions passed alongside the message.

    Every field is optional; unset fields fall back to the matching
    X-Zepto-* control header and then to the configured defaults.
    """
    template: Optional[TemplateRef] = None
    merge_info: Optional[Dict[str, Any]] = None
    per_recipient_merge_info: Optional[Dict[str, Any]] = None
    batch: bool = False
    track_opens: Optional[bool] = None
    track_clicks: Optional[bool] = None
    client_reference: Optional[str] = None
    bounce_address: Optional[str] = None

    @field_validator("client_reference", "bounce_address", mode="before")
    @classmethod
    def _strip_text(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

class ResolvedOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    template: Optional[TemplateRef] = None
    merge_info: Dict[str, Any] = Field(default_factory=dict)
    per_recipient_merge_info: Dict[str, Any] = Field(default_factory=dict)
    batch: bool = False
    track_opens: Optional[bool] = None
    track_clicks: Optional[bool] = None
    client_reference: Optional[str] = None
    bounce_address: Optional[str] = None

    @property
    def templated(self) -> bool:
        return self.template is not None
