from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .core.settings import EngineSettings
from .ledger.controller import register as register_ledgers

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    engine_settings = EngineSettings.from_module(settings)
    logger.info(
        "punch-ledger settings=%s holidays=%d workers=%d",
        settings_module,
        len(engine_settings.holidays),
        engine_settings.max_workers,
    )

    container = build_container(settings=engine_settings)
    app.extensions["punch_ledger"] = container

    register_ledgers(app, container)

    return app
