"""Flask application factory for the ClipCut web API."""

import tempfile
from pathlib import Path

from flask import Flask, jsonify


def create_app(
    work_dir: Path | None = None,
    ffmpeg_path: Path | None = None,
    resource_dir: Path | None = None,
) -> Flask:
    app = Flask(__name__)
    app.config["WORK_DIR"] = work_dir or Path(tempfile.mkdtemp(prefix="clipcut_web_"))
    app.config["FFMPEG_PATH"] = ffmpeg_path
    app.config["RESOURCE_DIR"] = resource_dir
    app.config["MAX_CONTENT_LENGTH"] = 10 * 1024 * 1024 * 1024  # 10 GB

    from clipcut.web.routes import bp
    app.register_blueprint(bp)

    @app.errorhandler(413)
    def request_entity_too_large(error):
        return jsonify({"error": "File too large"}), 413

    return app
