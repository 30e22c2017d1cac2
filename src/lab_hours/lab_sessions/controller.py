from __future__ import annotations

from flask import Flask, redirect, render_template, request
from flask_login import current_user

from ..auth.decorators import permission_required
from ..container import Container
from ..core.constants import DEFAULT_REDIRECT_AFTER_EDIT
from ..core.enums import Permission


def register(app: Flask, container: Container) -> None:
    service = container.lab_session_service

    def _redirect_back():
        return redirect(request.form.get("referrer") or DEFAULT_REDIRECT_AFTER_EDIT)

    @app.route("/", endpoint="index")
    def index():
        return render_template("index.html", signed_in_sessions=service.open_sessions())

    @app.route("/signin", methods=["POST"], endpoint="signin")
    def signin():
        remote_ip = request.headers.get("X-Real-IP") or request.remote_addr
        service.sign_in(request.form.get("student_id"), remote_ip=remote_ip)
        return redirect("/")

    @app.route("/students/<student_id>/new_lab_session", methods=["GET"], endpoint="new_lab_session_form")
    @permission_required(Permission.HOURS_EDIT)
    def new_lab_session_form(student_id):
        student = service.get_student(student_id)
        return render_template("edit_lab_session.html", student=student, lab_session=None, referrer=request.referrer)

    @app.route("/students/<student_id>/new_lab_session", methods=["POST"], endpoint="new_lab_session")
    @permission_required(Permission.HOURS_EDIT)
    def new_lab_session(student_id):
        service.create_for_student(
            student_id,
            time_in=request.form.get("time_in"),
            time_out=request.form.get("time_out"),
            notes=request.form.get("notes"),
            acting_name=current_user.name_display,
        )
        return _redirect_back()

    @app.route("/lab_sessions/<session_id>/edit", methods=["GET"], endpoint="edit_lab_session_form")
    @permission_required(Permission.HOURS_EDIT)
    def edit_lab_session_form(session_id):
        lab_session = service.get_session(session_id)
        student = service.get_student(lab_session.student_id)
        return render_template(
            "edit_lab_session.html", student=student, lab_session=lab_session, referrer=request.referrer
        )

    @app.route("/lab_sessions/<session_id>/edit", methods=["POST"], endpoint="edit_lab_session")
    @permission_required(Permission.HOURS_EDIT)
    def edit_lab_session(session_id):
        service.edit(
            session_id,
            time_in=request.form.get("time_in"),
            time_out=request.form.get("time_out"),
            notes=request.form.get("notes"),
            acting_name=current_user.name_display,
        )
        return _redirect_back()

    @app.route("/lab_sessions/<session_id>/delete", methods=["GET"], endpoint="delete_lab_session_form")
    @permission_required(Permission.HOURS_EDIT)
    def delete_lab_session_form(session_id):
        lab_session = service.get_session(session_id)
        return render_template("delete_lab_session.html", lab_session=lab_session, referrer=request.referrer)

    @app.route("/lab_sessions/<session_id>/delete", methods=["POST"], endpoint="delete_lab_session")
    @permission_required(Permission.HOURS_EDIT)
    def delete_lab_session(session_id):
        service.delete(session_id, acting_name=current_user.name_display)
        return _redirect_back()

    @app.route("/lab_sessions/<session_id>/sign_out", endpoint="sign_out_lab_session")
    @permission_required(Permission.HOURS_EDIT)
    def sign_out_lab_session(session_id):
        service.force_sign_out(session_id, acting_name=current_user.name_display)
        return redirect("/")

    @app.route("/lab_sessions/open", endpoint="open_lab_sessions")
    def open_lab_sessions():
        return render_template("signed_in_list.html", signed_in_sessions=service.open_sessions(ordered=True))
