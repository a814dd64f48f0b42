from flask import Blueprint, current_app, send_from_directory

static_bp = Blueprint("static_site", __name__)


@static_bp.get("/")
def index():
    return send_from_directory(current_app.config["STATIC_FOLDER"], "index.html")


@static_bp.get("/<path:filename>")
def static_file(filename: str):
    # send_from_directory rejects paths escaping the folder and 404s on missing files
    return send_from_directory(current_app.config["STATIC_FOLDER"], filename)
