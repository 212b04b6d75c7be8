"""
dry_run.py
──────────
DRY RUN: Parses an .eml file and prints the ZeptoMail endpoint and JSON
payload it would produce. NO EMAIL IS SENT and no API key is needed.

Run with:
    python3 dry_run.py path/to/message.eml
"""

import sys
import json
import email
from email import policy

from dotenv import load_dotenv

from mapper.payload_mapper import PayloadMapper
from settings import ZeptoMailSettings
from utils.mime_converter import message_from_mime


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print("usage: dry_run.py <message.eml>")
        return 2

    load_dotenv()

    with open(argv[0], "rb") as f:
        mime = email.message_from_binary_file(f, policy=policy.default)

    message = message_from_mime(mime)
    request = PayloadMapper(ZeptoMailSettings.from_env()).map(message)

    print("=" * 60)
    print(f"  DRY RUN — POST {request.path}")
    print(f"  batch={request.batch}  templated={request.templated}")
    print("=" * 60)
    print(json.dumps(request.payload, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
