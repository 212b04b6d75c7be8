from typing import Dict

_REDACT = {"authorization", "api_key", "mail_key", "password", "secret", "token"}

def redact_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Masks credentials in a header map, keeping the auth scheme visible."""
    if not headers:
        return {}
    redacted = {}
    for name, value in headers.items():
        if name.lower() not in _REDACT:
            redacted[name] = value
            continue
        scheme, _, secret = str(value).partition(" ")
        redacted[name] = f"{scheme} ***" if secret else "***"
    return redacted
