"""
Decorators for JSON API views.
"""

import json
import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from django.http import HttpRequest, JsonResponse

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import FoodtruckError, InvalidInputError

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


def api_view(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that turns application errors into JSON error responses.

    Any FoodtruckError raised by the view becomes
    {"success": false, "error": message} with the error's status code.
    Any other exception is logged with its traceback and becomes the same
    shape with status 500.

    Usage:
        @api_view
        def checkout(request):
            ...
    """

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        try:
            return view_func(request, *args, **kwargs)
        except FoodtruckError as e:
            if e.status_code >= 500:
                logger.error("%s %s failed: %s", request.method, request.path, e)
            else:
                logger.info(
                    "%s %s rejected (%d): %s",
                    request.method,
                    request.path,
                    e.status_code,
                    e.message,
                )
            return JsonResponse(
                {"success": False, "error": e.message},
                status=e.status_code,
            )
        except Exception as e:
            logger.exception("%s %s failed unexpectedly", request.method, request.path)
            return JsonResponse({"success": False, "error": str(e)}, status=500)

    return wrapper


def parse_body(request: HttpRequest, schema: type[_M]) -> _M:
    """
    Parse a JSON request body into a pydantic model.

    Raises:
        InvalidInputError: If the body is not JSON or fails validation.
    """
    try:
        body = json.loads(request.body or b"null")
    except json.JSONDecodeError as e:
        raise InvalidInputError("Invalid JSON in request body") from e

    if not isinstance(body, dict):
        raise InvalidInputError("Request body must be a JSON object")

    try:
        return schema.model_validate(body)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"])
        message = f"{field}: {first['msg']}" if field else first["msg"]
        raise InvalidInputError(message) from e


def read_json(request: HttpRequest) -> Any:
    """Parse a JSON request body of any shape."""
    try:
        return json.loads(request.body)
    except json.JSONDecodeError as e:
        raise InvalidInputError("Invalid JSON") from e
