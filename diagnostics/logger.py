# diagnostics/logger.py

import logging

logger = logging.getLogger("stap_sim")
logger.addHandler(logging.NullHandler())


def configure_logging(level: int = logging.INFO) -> None:
    """Console logging for scripts and demos."""
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    logger.setLevel(level)
