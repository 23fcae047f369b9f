from flask import Blueprint, jsonify

from filedrop.api.routes._deps import get_storage

bp_health = Blueprint("health", __name__)


@bp_health.get("")
def health():
    if not get_storage().base_path.is_dir():
        return jsonify({"status": "degraded", "upload_dir": "missing"}), 503
    return jsonify({"status": "ok", "upload_dir": "ok"}), 200
