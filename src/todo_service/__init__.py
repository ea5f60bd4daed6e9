import logging
import os

from flask import Flask, current_app, send_from_directory
from .config import Config
from .storage import MemoryStore


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__, static_folder=None)
    app.config.from_object(Config)

    if test_config:
        app.config.update(test_config)

    # Configure logging
    log_level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    backend = app.config.get("STORAGE_BACKEND", "memory")

    if backend == "redis":
        from .redis_store import RedisStore
        store = RedisStore.from_config(app.config)
    elif backend == "memory":
        # Seeded so a fresh instance never starts empty
        store = MemoryStore(seed_message=app.config["SEED_MESSAGE"])
    else:
        raise ValueError(f"unknown STORAGE_BACKEND: {backend!r} (expected 'memory' or 'redis')")

    # Attach store to app for access in blueprints
    app.extensions["store"] = store

    @app.route("/assets/<path:filename>")
    def assets(filename):
        return send_from_directory(os.path.abspath(current_app.config["ASSETS_DIR"]), filename)

    from .api import api_bp
    app.register_blueprint(api_bp, url_prefix="/api")

    @app.route("/health")
    def health():
        ok, msg = app.extensions["store"].validate_store()
        return ({"status": "ok", "message": msg}, 200) if ok else ({"status": "error", "message": msg}, 503)

    return app
