from email.message import EmailMessage as MIMEMessage
from mapper.payload_mapper import PayloadMapper
from utils.mime_converter import message_from_mime

def build_mime():
    msg = MIMEMessage()
    msg["From"] = "Alice <a@x.com>"
    msg["To"] = "b@x.com, Carol <c@x.com>"
    msg["Cc"] = "d@x.com"
    msg["Reply-To"] = "Support <help@x.com>"
    msg["Subject"] = "Quarterly report"
    msg["X-Zepto-Template"] = "ea0102"
    msg["X-Campaign"] = "q3"
    msg.set_content("See attached")
    msg.add_alternative("<p>See <img src=\"cid:logo@x\"></p>", subtype="html")
    msg.get_payload()[1].add_related(b"PNGDATA", maintype="image", subtype="png", cid="<logo@x>")
    msg.add_attachment(b"%PDF-1.4", maintype="application", subtype="pdf", filename="report.pdf")
    return msg

def test_addressing_and_bodies():
    message = message_from_mime(build_mime())

    assert message.sender.address == "a@x.com"
    assert message.sender.name == "Alice"
    assert [a.address for a in message.to] == ["b@x.com", "c@x.com"]
    assert message.to[0].name is None
    assert message.cc[0].address == "d@x.com"
    assert message.reply_to[0].name == "Support"
    assert message.subject == "Quarterly report"
    assert message.text_body.strip() == "See attached"
    assert "cid:logo@x" in message.html_body

def test_attachments_keep_disposition_and_content_id():
    message = message_from_mime(build_mime())

    by_type = {a.mime_type: a for a in message.attachments}
    assert set(by_type) == {"image/png", "application/pdf"}
    assert by_type["image/png"].content == b"PNGDATA"
    assert by_type["image/png"].is_inline
    assert by_type["application/pdf"].filename == "report.pdf"
    assert not by_type["application/pdf"].is_inline

def test_converted_message_maps_end_to_end():
    request = PayloadMapper().map(message_from_mime(build_mime()))

    assert request.path == "/v1.1/email/template"
    assert request.payload["template_key"] == "ea0102"
    assert request.payload["mime_headers"] == {"X-Campaign": "q3"}
    assert request.payload["inline_images"][0]["cid"] == "logo@x"
    assert request.payload["attachments"][0]["name"] == "report.pdf"
