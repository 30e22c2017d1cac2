from __future__ import annotations

from flask import Flask, redirect, render_template, request

from ..auth.decorators import permission_required
from ..common.validators import parse_id
from ..container import Container
from ..core.enums import Permission


def register(app: Flask, container: Container) -> None:
    service = container.mentor_service

    @app.route("/new_mentor", endpoint="new_mentor")
    @permission_required(Permission.HOURS_EDIT)
    def new_mentor():
        return render_template("new_mentor.html")

    @app.route("/mentors", methods=["GET"], endpoint="mentors")
    @permission_required(Permission.HOURS_EDIT)
    def mentors():
        return render_template("mentors.html", mentors=service.list_mentors())

    @app.route("/mentors", methods=["POST"], endpoint="create_mentor")
    @permission_required(Permission.HOURS_EDIT)
    def create_mentor():
        service.create_mentor(
            first_name=request.form.get("first_name"),
            last_name=request.form.get("last_name"),
            phone_number=request.form.get("phone_number"),
        )
        return redirect("/mentors")

    @app.route("/mentors/<mentor_id>/delete", methods=["GET"], endpoint="delete_mentor_form")
    @permission_required(Permission.HOURS_EDIT)
    def delete_mentor_form(mentor_id):
        return render_template("delete_mentor.html", mentor=service.get_mentor(parse_id(mentor_id)))

    @app.route("/mentors/<mentor_id>/delete", methods=["POST"], endpoint="delete_mentor")
    @permission_required(Permission.HOURS_EDIT)
    def delete_mentor(mentor_id):
        service.delete_mentor(parse_id(mentor_id))
        return redirect("/mentors")
