# coding: utf8
from werkzeug.exceptions import HTTPException

from app.errors.exceptions import ApiError
from app.lib.logger import logger


def api_error_handler(error):
    if isinstance(error, ApiError):
        if error.status >= 500:
            logger.error(f"{error.error}: {error.message}")
        return error.to_dict(), error.status

    if isinstance(error, HTTPException):
        return {
            "code": error.code,
            "error": error.name.upper().replace(" ", "_"),
            "message": error.description,
            "data": {},
        }, error.code

    logger.exception(f"Unhandled exception: {error}")
    return {
        "code": 500,
        "error": "INTERNAL_ERROR",
        "message": "Internal Server Error",
        "data": {},
    }, 500
