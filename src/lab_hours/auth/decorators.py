from functools import wraps

from flask_login import current_user

from ..core.exceptions import AuthorizationError


def permission_required(permission, message="Insufficient permissions."):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated or not current_user.has_permission(permission):
                raise AuthorizationError(message)
            return view(*args, **kwargs)

        return wrapper

    return decorator
