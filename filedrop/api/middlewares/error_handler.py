# filedrop/api/middlewares/error_handler.py
from flask import Flask, current_app, render_template
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from filedrop.core.exceptions import AppError, FileTooLargeError
from filedrop.core.logging_config import get_logger

logger = get_logger(__name__)


def _error_page(message: str, status_code: int):
    return render_template("error.html", message=message), status_code


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        if err.status_code >= 500:
            logger.error(f"Request failed: {err}")
        return _error_page(str(err), err.status_code)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(err: RequestEntityTooLarge):
        settings = current_app.config["SETTINGS"]
        too_large = FileTooLargeError(settings.max_file_size_bytes)
        logger.warning(f"Upload rejected: {too_large}")
        return _error_page(str(too_large), too_large.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return _error_page(err.description or err.name, err.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        logger.exception(f"Unhandled error: {err}")

        if current_app.debug:
            return _error_page(str(err), 500)

        return _error_page("Internal server error.", 500)
