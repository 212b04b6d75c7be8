import json
from email.message import EmailMessage as MIMEMessage
import dry_run
from settings import ENV_VARS

def test_dry_run_prints_endpoint_and_payload(tmp_path, capsys, monkeypatch):
    for name in ENV_VARS.values():
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(dry_run, "load_dotenv", lambda: None)
    msg = MIMEMessage()
    msg["From"] = "a@x.com"
    msg["To"] = "b@x.com"
    msg["Subject"] = "Hi"
    msg["X-Zepto-Batch"] = "on"
    msg.set_content("hi")
    path = tmp_path / "message.eml"
    path.write_bytes(bytes(msg))

    assert dry_run.main([str(path)]) == 0

    out = capsys.readouterr().out
    assert "POST /v1.1/email/batch" in out
    payload = json.loads(out[out.index("{"):])
    assert payload["to"] == [{"email_address": {"address": "b@x.com"}}]

def test_dry_run_usage(capsys):
    assert dry_run.main([]) == 2
    assert "usage" in capsys.readouterr().out
