from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def api_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def json_endpoint(view):
    """Map domain errors to JSON responses; unexpected errors become a generic 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except AuthorizationError as e:
            return api_error(str(e), 403)
        except NotFoundError as e:
            return api_error(str(e), 404)
        except ValidationError as e:
            return api_error(str(e), 400)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return api_error("Lỗi hệ thống, vui lòng thử lại", 500)

    return wrapper
