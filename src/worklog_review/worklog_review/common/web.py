"""Flask helpers shared by the controllers.

Identity (``user_id`` and ``role``) is placed in the session by the external
sign-in flow; controllers only read it.
"""

from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        raise AuthorizationError("Unknown role")


def error_response(message: str, status: int, field: Optional[str] = None):
    body = {"error": message}
    if field:
        body["field"] = field
    return jsonify(body), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def reviewer_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please sign in to continue", 401)
        if session.get("role") not in {Role.MANAGER.value, Role.ADMIN.value}:
            return error_response("Managers and admins only", 403)
        return view(*args, **kwargs)

    return wrapper


def domain_errors(view):
    """Translate domain exceptions into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return error_response(str(e), 400, e.field)
        except AuthorizationError as e:
            return error_response(str(e), 403)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except InvalidTransitionError as e:
            return error_response(str(e), 409)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return error_response("Internal server error", 500)

    return wrapper


def parse_date_arg(value: Optional[str], field_name: str) -> date:
    try:
        return parse_iso_date((value or "").strip())
    except ValueError:
        raise ValidationError("Date must be YYYY-MM-DD", field=field_name)


def optional_date_arg(value: Optional[str], field_name: str) -> Optional[date]:
    if not value:
        return None
    return parse_date_arg(value, field_name)
