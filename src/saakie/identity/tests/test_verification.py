"""Tests for webhook signature verification."""

import json
from datetime import datetime, timezone

import pytest
from svix.webhooks import Webhook

from saakie.identity import verification

SECRET = "whsec_MfKQ9r8GKYqrTwjUPD8ILPZIo2LaLaSw"


def signed_headers(body, msg_id="msg_1"):
    timestamp = datetime.now(timezone.utc)
    return {
        "svix-id": msg_id,
        "svix-timestamp": str(int(timestamp.timestamp())),
        "svix-signature": Webhook(SECRET).sign(msg_id, timestamp, body),
    }


class TestVerify:
    def test_returns_event_from_signed_body(self):
        body = json.dumps({"type": "user.created", "data": {"id": "u1"}})

        event = verification.verify(body.encode(), signed_headers(body), secret=SECRET)

        assert event.type == "user.created"
        assert event.data == {"id": "u1"}

    def test_tampered_body_is_rejected(self):
        body = json.dumps({"type": "user.created", "data": {"id": "u1"}})
        tampered = body.replace("u1", "u2")

        with pytest.raises(verification.SignatureError):
            verification.verify(tampered.encode(), signed_headers(body), secret=SECRET)

    def test_signed_non_json_body_is_rejected(self):
        body = "not json"

        with pytest.raises(verification.SignatureError):
            verification.verify(body.encode(), signed_headers(body), secret=SECRET)

    def test_signed_body_without_type_is_rejected(self):
        body = json.dumps({"data": {"id": "u1"}})

        with pytest.raises(verification.SignatureError):
            verification.verify(body.encode(), signed_headers(body), secret=SECRET)

    def test_missing_data_becomes_empty(self):
        body = json.dumps({"type": "session.ended"})

        assert verification.verify(body.encode(), signed_headers(body), secret=SECRET).data == {}
