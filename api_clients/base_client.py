import requests
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger("zeptomail_transport")

class BaseClient:
    def __init__(self, base_url: str, timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def _post(self, endpoint: str, json: Optional[Dict[str, Any]] = None, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        # Timeout applies to each call on its own
        return self.session.post(
            f"{self.base_url}{endpoint}",
            json=json,
            headers=headers,
            timeout=self.timeout,
        )

    def close(self) -> None:
        self.session.close()
