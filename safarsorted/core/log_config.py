# safarsorted/core/log_config.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Install one stream handler on the root logger.
    Safe to call more than once (uvicorn reload, tests).
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(getattr(h, "_safarsorted", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._safarsorted = True  # marker so we don't stack handlers
    root.addHandler(handler)
