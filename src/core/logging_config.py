import logging
import sys
from pathlib import Path

from .config import settings

PAYMENT_LOGGER = "src.apps.uniteller"


def setup_logging() -> None:
    """
    Настройка логирования приложения.

    Общий лог пишется в stdout и в файл, события платёжного протокола
    Uniteller дополнительно дублируются в отдельный файл.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    formatter = logging.Formatter(settings.log_format)

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=log_level,
        format=settings.log_format,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_dir / settings.log_file, encoding="utf-8"),
        ],
    )

    if settings.payment_log_file:
        payment_handler = logging.FileHandler(
            log_dir / settings.payment_log_file,
            encoding="utf-8",
        )
        payment_handler.setFormatter(formatter)
        logging.getLogger(PAYMENT_LOGGER).addHandler(payment_handler)

    for name in ("httpx", "httpcore", "aiosqlite"):
        logging.getLogger(name).setLevel(logging.WARNING)
