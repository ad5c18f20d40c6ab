"""
Logging configuration. Application loggers live under the "jobpilot" namespace;
chatty third-party loggers (HTTP clients, the OpenAI SDK, PDF parsing) are held
at WARNING unless the app itself runs at DEBUG.
"""
import logging
import sys

from jobpilot.app.core.config import settings

ROOT_LOGGER = "jobpilot"
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3", "pdfminer", "multipart")


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure stdout logging once per process. Returns the application root logger."""
    level_val = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=level_val,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if level_val > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    app_logger = logging.getLogger(ROOT_LOGGER)
    app_logger.setLevel(level_val)
    return app_logger


def get_logger(name: str) -> logging.Logger:
    """Module logger, e.g. get_logger("services.match_scorer") -> jobpilot.services.match_scorer"""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
