import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

QUIET_LOGGERS = ("urllib3", "requests", "watchdog")


def _level(name, default):
    return getattr(logging, (name or "").strip().upper(), default)


def configure_logging():
    """Root logging for the Streamlit process.

    DASHBOARD_LOG_LEVEL sets the root level. TASKCAL_LOG_LEVEL overrides it
    for the engine loggers only, e.g. DEBUG to trace index builds and swipes.
    """
    level = _level(os.getenv("DASHBOARD_LOG_LEVEL", "INFO"), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    engine_level = os.getenv("TASKCAL_LOG_LEVEL")
    if engine_level:
        logging.getLogger("taskcal").setLevel(_level(engine_level, level))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return level
