import base64
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from models.address import Address

class Attachment(BaseModel):
    model_config = ConfigDict(ser_json_bytes="base64")

    content: bytes = b""
    mime_type: str = "application/octet-stream"
    filename: Optional[str] = None
    content_id: Optional[str] = None
    disposition: Optional[str] = None

    @field_validator("content", mode="before")
    @classmethod
    def _decode_base64(cls, value):
        # Over JSON the content travels base64-encoded
        if isinstance(value, str):
            return base64.b64decode(value)
        return value

    @property
    def is_inline(self) -> bool:
        if self.disposition and "inline" in self.disposition.lower():
            return True
        return bool(self.content_id)

class Header(BaseModel):
    name: str
    value: str

class EmailMessage(BaseModel):
    sender: Optional[Address] = None
    to: List[Address] = Field(default_factory=list)
    cc: List[Address] = Field(default_factory=list)
    bcc: List[Address] = Field(default_factory=list)
    reply_to: List[Address] = Field(default_factory=list)
    subject: Optional[str] = None
    html_body: Optional[str] = None
    text_body: Optional[str] = None
    attachments: List[Attachment] = Field(default_factory=list)
    headers: List[Header] = Field(default_factory=list)

    def add_header(self, name: str, value: str) -> None:
        self.headers.append(Header(name=name, value=value))

    def has_header(self, name: str) -> bool:
        return any(h.name == name for h in self.headers)

    def get_header(self, name: str) -> Optional[str]:
        # Header names are matched exactly
        return next((h.value for h in self.headers if h.name == name), None)
