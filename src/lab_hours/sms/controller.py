from __future__ import annotations

from flask import Flask, request

from ..container import Container
from .twiml import CONTENT_TYPE, render_sms_response


def register(app: Flask, container: Container) -> None:
    @app.route("/sms", methods=["POST"], endpoint="sms")
    def sms():
        messages = container.sms_service.handle(request.form.get("From"), request.form.get("Body"))
        # Always 200: the gateway only relays the reply text
        return render_sms_response(messages), 200, {"Content-Type": CONTENT_TYPE}
