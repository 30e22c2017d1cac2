from __future__ import annotations

from flask import Flask, render_template

from ..auth.decorators import permission_required
from ..container import Container
from ..core.enums import Permission


def register(app: Flask, container: Container) -> None:
    @app.route("/leader_board", endpoint="leader_board")
    def leader_board():
        return render_template("leader_board.html", students=container.student_service.leader_board())

    @app.route("/students/<student_id>", endpoint="student")
    def student(student_id):
        found = container.lab_session_service.get_student(student_id)
        lab_sessions = container.lab_session_service.sessions_for_student(found.id)
        return render_template("student.html", student=found, lab_sessions=lab_sessions)

    @app.route("/reindex_students", endpoint="reindex_students")
    @permission_required(Permission.HOURS_EDIT, "Need to be an administrator.")
    def reindex_students():
        count = container.student_service.reindex(container.members_client)
        return f"Successfully imported {count} students."
