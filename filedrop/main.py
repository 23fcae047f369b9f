# filedrop/main.py
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from filedrop.api.middlewares.error_handler import register_error_handlers
from filedrop.api.middlewares.request_logger import register_request_logging
from filedrop.api.routes import register_routes
from filedrop.api.routes._deps import STORAGE_EXTENSION_KEY
from filedrop.config.flask_config import configure_app
from filedrop.config.settings import Settings, load_settings
from filedrop.core.logging_config import get_logger, setup_logging
from filedrop.infrastructure.storage.local_file_storage import (
    LocalFileStorage,
    LocalFileStorageConfig,
)


def create_app(settings: Settings | None = None) -> Flask:
    settings = settings or load_settings()
    logger = setup_logging("filedrop", settings.log_level)

    # public_dir is served at the site root, like the upload form itself
    app = Flask(
        __name__,
        static_folder=str(settings.public_dir),
        static_url_path="",
    )

    CORS(
        app,
        resources={r"/*": {"origins": settings.cors_origins}},
        methods=["GET", "POST", "OPTIONS"],
    )

    configure_app(app, settings)

    # upload directory is created once here; a bad path fails startup
    storage = LocalFileStorage(config=LocalFileStorageConfig(base_path=settings.upload_dir))
    app.extensions[STORAGE_EXTENSION_KEY] = storage
    logger.info(f"Storing uploads in {storage.base_path}")

    register_request_logging(app)
    register_routes(app)
    register_error_handlers(app)

    return app


def run() -> None:
    settings = load_settings()
    app = create_app(settings)
    get_logger("filedrop").info(
        f"Server running on http://localhost:{settings.port}"
    )
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    run()
