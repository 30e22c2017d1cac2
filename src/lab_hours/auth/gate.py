from __future__ import annotations

import logging
from urllib.parse import urlencode

from flask import Flask, redirect, request, session
from flask_login import LoginManager, current_user, login_user

from ..core.constants import MEMBERS_SITE_NAME, PUBLIC_PATH_FRAGMENT, PUBLIC_PATHS
from .model import AuthUser

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


def is_public_path(path: str) -> bool:
    return path in PUBLIC_PATHS or PUBLIC_PATH_FRAGMENT in path


def sign_in_url(members_url: str, path: str) -> str:
    query = urlencode({"site": MEMBERS_SITE_NAME, "path": path}, safe="/")
    return f"{members_url}?{query}"


def install(app: Flask, members_client) -> LoginManager:
    """Resolve the current user on every request and gate private pages.

    The user comes from the session when cached there, otherwise from the
    members service; an unresolved user is sent to the members sign-in page
    unless the path is public.
    """
    login_manager = LoginManager()
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id: str):
        cached = session.get(SESSION_USER_KEY)
        if cached and str(cached.get("id")) == str(user_id):
            return AuthUser.from_payload(cached)
        return None

    @login_manager.request_loader
    def load_user_from_request(req):
        user = members_client.get_user(req)
        if user is None:
            return None
        session.permanent = True
        session[SESSION_USER_KEY] = user.to_session()
        login_user(user)
        logger.info("Resolved %s from members service", user.name_display)
        return user

    @app.before_request
    def require_user():
        if request.endpoint == "static" or current_user.is_authenticated:
            return None
        if is_public_path(request.path):
            return None
        return redirect(sign_in_url(app.config["MEMBERS_URL"], request.path))

    return login_manager
