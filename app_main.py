"""Application entry point for the RecallCart memory game."""

from __future__ import annotations

import random
import socket
import sys

from PySide6.QtCore import QCoreApplication

from recall_app.core.catalog import ItemCatalog
from recall_app.core.services.kv_store import KeyValueStore
from recall_app.core.services.persistence import PersistenceSync, PlayerIdentity
from recall_app.core.session_controller import SessionController
from recall_app.server.api_server import start_api_server
from recall_app.ui.round_ticker import RoundTicker
from recall_app.utils.logging_config import configure_logging
from recall_app.utils.runtime_config import RuntimeConfig


def _determine_player_url(port: int) -> str:
    """Best-effort determination of the local IP for the player-facing URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/session"


def main() -> None:
    """Initialize logging, build the session, start the API server, and run the tick loop."""
    config = RuntimeConfig.from_env()
    logger = configure_logging(config.log_level)
    logger.info("Starting RecallCart…")

    catalog = ItemCatalog.from_json_file(config.catalog_file) if config.catalog_file else ItemCatalog.default()
    store = KeyValueStore(config.data_file)
    sync = PersistenceSync.for_identity(
        PlayerIdentity(config.player_id),
        store=store,
        storage_url=config.storage_url,
    )
    controller = SessionController(
        catalog=catalog,
        rng=random.Random(config.seed),
        sync=sync,
        auto_start_play=config.auto_start_play,
    )
    controller.load_persisted()

    start_api_server(controller=controller, store=store, host=config.host, port=config.port)
    logger.info("Game session available at %s", _determine_player_url(config.port))

    app = QCoreApplication(sys.argv)
    ticker = RoundTicker(controller)
    ticker.phase_changed.connect(lambda phase: logger.info("Phase is now %s", phase))
    app.aboutToQuit.connect(controller.shutdown)
    ticker.start()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
