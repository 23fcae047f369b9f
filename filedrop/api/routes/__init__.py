# filedrop/api/routes/__init__.py

from flask import Flask

from filedrop.api.routes.file_routes import bp_files
from filedrop.api.routes.health_routes import bp_health
from filedrop.api.routes.upload_routes import bp_upload


def register_routes(app: Flask) -> None:
    app.register_blueprint(bp_health, url_prefix="/health")

    app.register_blueprint(bp_upload)
    app.register_blueprint(bp_files)
