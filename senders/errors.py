import json
from typing import Any, Dict, Optional


class ZeptoMailError(Exception):
    """Base class for everything this transport raises."""


class ZeptoConfigurationError(ZeptoMailError, ValueError):
    """Raised at setup time, before any send is attempted."""


class ZeptoSendError(ZeptoMailError):
    """A send that did not succeed. Subclasses say why."""


class ZeptoTransportError(ZeptoSendError):
    pass


class ZeptoHttpError(ZeptoSendError):
    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"ZeptoMail returned HTTP {status_code}: {body}")


class ZeptoApiError(ZeptoSendError):
    """2xx response whose body carries an `error` object."""

    def __init__(self, body: Dict[str, Any], status_code: Optional[int] = None):
        self.body = body
        self.status_code = status_code
        super().__init__(f"Error sending email: {json.dumps(body)}")
