"""
Logging setup with contextvars-based metadata injection.

Every record gets a short session tag, a hashed seller tag and the current
workflow step, so a single log file can be split per listing session.
"""

import contextvars
import hashlib
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

cv_session_tag = contextvars.ContextVar("session_tag", default="-")
cv_seller_tag = contextvars.ContextVar("seller_tag", default="-")
cv_session_id_full = contextvars.ContextVar("session_id_full", default="-")
cv_step = contextvars.ContextVar("step", default="-")

_NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "asyncio")


def make_session_tag(value: str, length: int = 8) -> str:
    """
    Stable short tag derived from a full id (session id, seller id).
    Uses BLAKE2s so raw seller ids never appear in log lines.
    """
    h = hashlib.blake2s(value.encode("utf-8"), digest_size=8).hexdigest()
    return h[:length]


class ContextInjectFilter(logging.Filter):
    """Copy the session/seller/step context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session = cv_session_tag.get() or "-"
        record.seller = cv_seller_tag.get() or "-"
        record.step = cv_step.get() or "-"
        return True


def set_log_context(
    *,
    session_id: str | None = None,
    seller_id: str | None = None,
    step: str | None = None,
) -> None:
    if session_id is not None:
        cv_session_id_full.set(str(session_id))
        cv_session_tag.set(make_session_tag(str(session_id)))

    if seller_id is not None:
        cv_seller_tag.set(make_session_tag(str(seller_id), length=6))

    if step is not None:
        cv_step.set(str(step))


@contextmanager
def log_step(step: str) -> Iterator[None]:
    """Tag records emitted inside the block with `step`; the previous step is restored on exit."""
    token = cv_step.set(str(step))
    try:
        yield
    finally:
        cv_step.reset(token)


def get_log_context() -> dict[str, str]:
    """Current context as a dict, for trace metadata."""
    return {
        "session_tag": str(cv_session_tag.get() or "-"),
        "session_id_full": str(cv_session_id_full.get() or "-"),
        "seller_tag": str(cv_seller_tag.get() or "-"),
        "step": str(cv_step.get() or "-"),
    }


def configure_logging(
    *,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 10_000_000,
    backup_count: int = 5,
) -> None:
    """
    Install console (and optionally rotating file) handlers on the root logger.

    Safe to call again: existing root handlers are replaced. The file handler
    records the workflow step, the console does not.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)

    ctx_filter = ContextInjectFilter()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] s=%(session)s u=%(seller)s | %(message)s", datefmt="%H:%M:%S")
    )
    console.addFilter(ctx_filter)
    root.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s | s=%(session)s u=%(seller)s step=%(step)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        fh.addFilter(ctx_filter)
        root.addHandler(fh)

    # opik reports over httpx
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("opik").setLevel(logging.INFO)

    logging.getLogger(__name__).debug(
        "Logging configured (console=%s, file=%s)", logging.getLevelName(console_level), log_file or "-"
    )
