"""Application factory and app-wide configuration."""

from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from wealthplan.app.api.routes import api_bp
from wealthplan.config import DefaultConfig
from wealthplan.services.advisor import AdviceService, TextGenerator
from wealthplan.storage.repository import (
    InMemorySlotRepository,
    SlotRepository,
    SqliteSlotRepository,
)


def create_app(
    config: Optional[Mapping[str, Any]] = None,
    repository: Optional[SlotRepository] = None,
    advice_generator: Optional[TextGenerator] = None,
) -> Flask:
    """Build the Flask app instance with its collaborators attached."""
    app = Flask(__name__)
    app.config.from_object(DefaultConfig)
    app.config.from_prefixed_env("WEALTHPLAN")
    if config:
        app.config.from_mapping(config)

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    if repository is None:
        db_path = app.config.get("DATABASE_PATH")
        repository = SqliteSlotRepository(db_path) if db_path else InMemorySlotRepository()

    app.extensions["wealthplan"] = {
        "repository": repository,
        "advisor": AdviceService(advice_generator) if advice_generator else None,
    }
    app.logger.info("slot repository: %s", type(repository).__name__)

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
