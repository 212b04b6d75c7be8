from abc import ABC, abstractmethod
from typing import Optional
from models.dispatch import DispatchResult, ZeptoRequest
from models.message import EmailMessage
from models.send_options import SendOptions

class BaseSender(ABC):
    @abstractmethod
    def preview(self, message: EmailMessage, options: Optional[SendOptions] = None) -> ZeptoRequest:
        pass

    @abstractmethod
    def send(self, message: EmailMessage, options: Optional[SendOptions] = None) -> DispatchResult:
        pass
