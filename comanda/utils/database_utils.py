from datetime import datetime, timezone


def now_trimmed():
    """Retorna datetime atual em UTC, sem microsegundos"""
    return datetime.now(timezone.utc).replace(microsecond=0)
