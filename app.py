from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel
from typing import Any, Dict, Optional
from functools import lru_cache
import os
import logging
from dotenv import load_dotenv

from email_factory import EmailFactory
from models.message import EmailMessage
from models.send_options import SendOptions
from senders.base_sender import BaseSender
from senders.errors import (
    ZeptoApiError,
    ZeptoConfigurationError,
    ZeptoHttpError,
    ZeptoTransportError,
)

# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
    handlers=[
        logging.FileHandler(os.getenv("LOG_FILE", "zeptomail.log")),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger("zeptomail_transport")

app = FastAPI(title="ZeptoMail Transport")

class SendPayload(BaseModel):
    message: EmailMessage
    options: Optional[SendOptions] = None

@lru_cache
def _build_sender() -> BaseSender:
    return EmailFactory.get_sender(os.getenv("EMAIL_PROVIDER", "zeptomail"))

def get_sender() -> BaseSender:
    try:
        return _build_sender()
    except ZeptoConfigurationError as e:
        logger.error(f"Sender misconfigured: {e}")
        raise HTTPException(status_code=500, detail=str(e))

@app.get("/health")
def health():
    return {"status": "ok"}

@app.post("/preview")
def preview(payload: SendPayload, sender: BaseSender = Depends(get_sender)) -> Dict[str, Any]:
    request = sender.preview(payload.message, payload.options)
    return {"endpoint": request.path, "payload": request.payload}

@app.post("/send")
def send(payload: SendPayload, sender: BaseSender = Depends(get_sender)) -> Dict[str, Any]:
    try:
        result = sender.send(payload.message, payload.options)
    except ZeptoApiError as e:
        raise HTTPException(status_code=502, detail={"error": "application_error", "body": e.body})
    except ZeptoHttpError as e:
        raise HTTPException(status_code=502, detail={"error": "http_error", "status_code": e.status_code, "body": e.body})
    except ZeptoTransportError as e:
        raise HTTPException(status_code=504, detail={"error": "transport_error", "message": str(e)})

    return {
        "status": "sent",
        "endpoint": result.path,
        "request_id": result.request_id,
        "response": result.response,
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8050")))
