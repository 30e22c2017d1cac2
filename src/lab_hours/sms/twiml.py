from __future__ import annotations

from typing import Sequence
from xml.sax.saxutils import escape

CONTENT_TYPE = "text/xml"


def render_sms_response(messages: Sequence[str]) -> str:
    """Reply body the SMS gateway turns into one text per <Sms> element."""
    body = "".join(f"<Sms>{escape(m)}</Sms>" for m in messages)
    return f"<Response>{body}</Response>"
