"""Logger compartilhado da aplicação."""
import logging
import sys

from comanda.config.settings import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class _ContadorLogHandler(logging.Handler):
    """Conta mensagens por nível na métrica log_messages_total."""

    def emit(self, record: logging.LogRecord) -> None:
        from comanda.utils.prometheus_metrics import log_messages_total

        log_messages_total.labels(level=record.levelname.lower()).inc()


def configurar_logging() -> logging.Logger:
    root = logging.getLogger("comanda")
    if root.handlers:
        return root

    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(stream)
    root.addHandler(_ContadorLogHandler())
    return root


configurar_logging()
logger = logging.getLogger("comanda")
