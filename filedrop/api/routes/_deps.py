# filedrop/api/routes/_deps.py
from flask import current_app

from filedrop.config.settings import Settings
from filedrop.infrastructure.storage.local_file_storage import LocalFileStorage

STORAGE_EXTENSION_KEY = "filedrop.storage"


def get_settings() -> Settings:
    return current_app.config["SETTINGS"]


def get_storage() -> LocalFileStorage:
    return current_app.extensions[STORAGE_EXTENSION_KEY]
