from flask import Flask

from filedrop.config.settings import Settings

# Room for multipart boundaries and headers around the file part.
MULTIPART_SLACK_BYTES = 64 * 1024


def configure_app(app: Flask, settings: Settings) -> None:
    app.config["ENV"] = settings.environment
    app.config["DEBUG"] = settings.debug
    app.config["MAX_CONTENT_LENGTH"] = settings.max_file_size_bytes + MULTIPART_SLACK_BYTES
    app.config["SETTINGS"] = settings
