# filedrop/api/middlewares/request_logger.py
import time
import uuid

from flask import Flask, g, request

from filedrop.core.logging_config import get_logger

logger = get_logger(__name__)


def register_request_logging(app: Flask) -> None:
    @app.before_request
    def log_request_started():
        g.request_id = str(uuid.uuid4())
        g.request_started = time.time()
        logger.info(f"Request started: {request.method} {request.path} [request_id={g.request_id}]")

    @app.after_request
    def log_request_completed(response):
        request_id = getattr(g, "request_id", None)
        started = getattr(g, "request_started", None)
        duration = time.time() - started if started else 0.0

        logger.info(
            f"Request completed: {request.method} {request.path} "
            f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
        )

        if request_id:
            response.headers["X-Request-ID"] = request_id
        return response
