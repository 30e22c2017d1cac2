from __future__ import annotations

from flask import Flask, jsonify, render_template, request
from flask_socketio import SocketIO

from ..auth.decorators import permission_required
from ..container import Container
from ..core.constants import TAG_SOCKET_EVENT, TAG_SOCKET_NAMESPACE
from ..core.enums import Permission
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container, socketio: SocketIO) -> None:
    bridge = container.tag_bridge

    def send(client_id: str, message: dict) -> None:
        socketio.emit(TAG_SOCKET_EVENT, message, to=client_id, namespace=TAG_SOCKET_NAMESPACE)

    bridge.attach_sender(send)

    @socketio.on("connect", namespace=TAG_SOCKET_NAMESPACE)
    def on_connect(auth=None):
        bridge.connect(request.sid)

    @socketio.on("disconnect", namespace=TAG_SOCKET_NAMESPACE)
    def on_disconnect(reason=None):
        bridge.disconnect(request.sid)

    @app.route("/tag_ws", endpoint="tag_ws")
    def tag_ws():
        # Plain HTTP hit on the socket path; the live socket itself is served by Socket.IO
        return render_template(
            "index.html", signed_in_sessions=container.lab_session_service.open_sessions()
        )

    @app.route("/tag/events/in/<tag_id>", endpoint="tag_event_in")
    def tag_event_in(tag_id):
        owner = bridge.tag_in(tag_id)
        return jsonify(owner.to_payload())

    @app.route("/tag/events/out/<tag_id>", endpoint="tag_event_out")
    def tag_event_out(tag_id):
        error = bridge.tag_out(tag_id)
        if error:
            raise ValidationError(error)
        return ""

    @app.route("/tag/manage", endpoint="tag_manage")
    @permission_required(Permission.HOURS_MANAGE_TAGS, "Need to be an administrator.")
    def tag_manage():
        return render_template(
            "tag_manage_wizard.html",
            students=container.student_service.list_students(),
            mentors=container.mentor_service.list_mentors(),
            tags=container.tag_service.list_tags(),
        )

    @app.route("/tag/manage/assign", endpoint="tag_manage_assign")
    @permission_required(Permission.HOURS_MANAGE_TAGS, "Need to be an administrator.")
    def tag_manage_assign():
        tag = container.tag_service.assign(request.args.get("tag"), request.args.get("id"), request.args.get("mode"))
        return f"Assigned tag {tag.tag_id}."

    @app.route("/tag/live", endpoint="tag_live")
    def tag_live():
        return render_template("live_tag_view.html", namespace=TAG_SOCKET_NAMESPACE)
