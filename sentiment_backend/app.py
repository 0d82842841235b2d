# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from sentiment_backend.infrastructure.container import Container
from sentiment_backend.shared.config import AppConfig, load_config
from sentiment_backend.shared.logging import logger, setup_logging
from sentiment_backend.shared.middleware.error_handler import configure_error_handling
from sentiment_backend.shared.middleware.request_logger import configure_request_logging


def create_app(
    config: AppConfig | None = None,
    container: Container | None = None,
) -> Flask:
    if container is not None:
        config = container.config
    config = config or load_config()
    container = container or Container(config)

    setup_logging(config.log_level, config.log_file, json_logs=config.log_json)
    container.database.create_all()

    app = Flask(__name__)
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.config.update(SECRET_KEY=config.secret_key)

    CORS(app, resources={r"/*": {"origins": config.security.allowed_origins}})

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.analysis_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Permitted-Cross-Domain-Policies", "none")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    app.extensions["container"] = container

    logger.info(f"Flask app initialized env={config.app_env}")
    return app
