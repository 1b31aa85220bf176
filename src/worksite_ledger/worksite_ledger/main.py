from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .checklists.controller import register as register_checklists
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .payroll.controller import register as register_payroll
from .sites.controller import register as register_sites
from .state.controller import register as register_state
from .transactions.controller import register as register_transactions
from .workers.controller import register as register_workers
from .worklogs.controller import register as register_worklogs

logger = logging.getLogger(__name__)


def _start_change_feed(container: Container, interval: float) -> BackgroundScheduler:
    scheduler = BackgroundScheduler()
    container.change_feed.schedule(scheduler, interval=interval)
    scheduler.start()
    atexit.register(lambda: scheduler.shutdown(wait=False))
    logger.info("change feed polling every %ss", interval)
    return scheduler


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        container = build_container(
            db_config=db_config,
            suppress_seconds=float(getattr(settings, "SYNC_SUPPRESS_SECONDS", 2.0)),
            page_size=int(getattr(settings, "REMOTE_PAGE_SIZE", 1000)),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            logger.info("schema ready (tables=%s)", len(list_tables(container.conn)))

    container.store.load()

    poll_seconds = float(getattr(settings, "REALTIME_POLL_SECONDS", 0) or 0)
    if poll_seconds > 0:
        app.extensions["scheduler"] = _start_change_feed(container, poll_seconds)

    app.extensions["container"] = container

    register_state(app, container)
    register_sites(app, container)
    register_workers(app, container)
    register_worklogs(app, container)
    register_transactions(app, container)
    register_checklists(app, container)
    register_payroll(app, container)

    return app
