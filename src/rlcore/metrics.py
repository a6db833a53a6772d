"""Console logging setup and a structured JSONL metrics log.

Every module logs through ``logging.getLogger(__name__)``, so all records
land under the ``"rlcore"`` logger hierarchy. :func:`setup_logging`
attaches a compact console handler to it.

Training metrics go to a JSONL file, one self-describing JSON object per
line; fields may vary between records.

Usage::

    from rlcore.metrics import MetricsLogger, setup_logging

    setup_logging()
    with MetricsLogger("runs/reinforce/metrics.jsonl") as metrics:
        metrics.write({"iteration": 10, "loss": 0.42, "episode_return": 0.9})
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import IO, Any, Protocol

import jax.numpy as jnp
import numpy as np

LOGGER_NAME = "rlcore"


class MetricsSink(Protocol):
    """Extra destination every :meth:`MetricsLogger.write` is forwarded to."""

    def log(self, record: dict[str, Any], step: int | None = None) -> None: ...
    def close(self) -> None: ...


# ---------------------------------------------------------------------------
# Console logging
# ---------------------------------------------------------------------------

_LEVEL_ABBREV = {
    logging.DEBUG: "D",
    logging.INFO: "I",
    logging.WARNING: "W",
    logging.ERROR: "E",
    logging.CRITICAL: "C",
}


class _TrainFormatter(logging.Formatter):
    """Abbreviated level, millisecond timestamp, logger name.

    Example output::

        I 2026-10-19 14:30:22.123 [rlcore.runner.trainer] iteration 10/100 (10.0%) | loss=0.42
    """

    def format(self, record: logging.LogRecord) -> str:
        lvl = _LEVEL_ABBREV.get(record.levelno, "?")
        ts = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        msg = record.getMessage()
        if record.exc_info:
            msg = f"{msg}\n{self.formatException(record.exc_info)}"
        return f"{lvl} {ts}.{int(record.msecs):03d} [{record.name}] {msg}"


def setup_logging(level: int = logging.INFO) -> None:
    """Install the compact console handler on the ``rlcore`` logger.

    Repeated calls replace the handler rather than stacking duplicates.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for h in logger.handlers[:]:
        logger.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(_TrainFormatter())
    logger.addHandler(handler)
    logger.propagate = False


def log_iteration_progress(
    iteration: int,
    total_iterations: int,
    metrics: dict[str, Any] | None = None,
    logger_name: str = LOGGER_NAME,
) -> None:
    """Log a one-line progress message.

    Floats are shown with four significant digits; ``iteration`` and
    ``wall_time`` entries of *metrics* are skipped.
    """
    pct = 100.0 * iteration / total_iterations if total_iterations > 0 else 0.0
    parts = [f"iteration {iteration}/{total_iterations} ({pct:.1f}%)"]
    if metrics:
        fields = []
        for k, v in metrics.items():
            if k in ("iteration", "wall_time"):
                continue
            v = _to_python(v)
            fields.append(f"{k}={v:.4g}" if isinstance(v, float) else f"{k}={v}")
        if fields:
            parts.append(" ".join(fields))
    logging.getLogger(logger_name).info(" | ".join(parts))


# ---------------------------------------------------------------------------
# JSONL metrics
# ---------------------------------------------------------------------------


class MetricsLogger:
    """Append-only JSONL metrics file.

    Args:
        path: JSONL file; parent directories are created.
        sinks: Extra destinations each record is forwarded to.
    """

    def __init__(self, path: str | Path, sinks: list[MetricsSink] | None = None) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file: IO[str] = open(self._path, "a")  # noqa: SIM115
        self._start_time = time.monotonic()
        self._sinks: list[MetricsSink] = sinks or []

    def write(self, record: dict[str, Any]) -> None:
        """Append *record* as one JSON line.

        JAX and numpy scalars become Python numbers, and ``wall_time``
        (seconds since the logger was created) is added unless present.
        """
        row = {k: _to_python(v) for k, v in record.items()}
        row.setdefault("wall_time", round(time.monotonic() - self._start_time, 3))
        self._file.write(json.dumps(row, default=str) + "\n")
        self._file.flush()

        for sink in self._sinks:
            sink.log(row, step=row.get("iteration"))

    def close(self) -> None:
        self._file.close()
        for sink in self._sinks:
            sink.close()

    @property
    def path(self) -> Path:
        return self._path

    def __enter__(self) -> MetricsLogger:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"MetricsLogger({self._path})"


def read_metrics(path: str | Path) -> list[dict[str, Any]]:
    """Read every record of a JSONL metrics file; ``[]`` if it does not exist."""
    p = Path(path)
    if not p.exists():
        return []
    return [json.loads(line) for line in p.read_text().splitlines() if line.strip()]


def _to_python(val: Any) -> Any:
    if isinstance(val, (jnp.ndarray, np.ndarray)) and val.size == 1:
        return val.item()
    if isinstance(val, (np.integer, np.floating, np.bool_)):
        return val.item()
    return val
