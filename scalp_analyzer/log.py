# scalp_analyzer/log.py
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once for CLI runs."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
