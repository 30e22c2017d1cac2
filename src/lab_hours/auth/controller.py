from __future__ import annotations

from flask import Flask, redirect, session
from flask_login import logout_user

from .gate import SESSION_USER_KEY


def register(app: Flask) -> None:
    @app.route("/logout", endpoint="logout")
    def logout():
        session.pop(SESSION_USER_KEY, None)
        logout_user()
        return redirect(f"{app.config['MEMBERS_URL']}/logout")
