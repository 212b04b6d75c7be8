from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

class ZeptoRequest(BaseModel):
    path: str
    payload: Dict[str, Any]
    batch: bool = False
    templated: bool = False

class DispatchResult(BaseModel):
    path: str
    response: Dict[str, Any] = Field(default_factory=dict)
    request_headers: Dict[str, str] = Field(default_factory=dict)

    @property
    def request_id(self) -> Optional[str]:
        """ZeptoMail's identifier for the accepted request, if it returned one."""
        return self.response.get("request_id")
