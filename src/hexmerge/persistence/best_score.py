"""Best-score persistence — the only state that outlives a session.

Stored as a one-key YAML document (``best_score: N``).
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

log = logging.getLogger(__name__)

DEFAULT_BEST_SCORE_PATH = "best_score.yaml"


def load_best_score(path: str | Path = DEFAULT_BEST_SCORE_PATH) -> int:
    """Read the saved best score.

    A missing or unreadable file yields 0.
    """
    p = Path(path)
    if not p.exists():
        log.info("No best score at %s — starting from 0", p)
        return 0

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError:
        log.warning("Best score file %s is not valid YAML — ignoring", p)
        return 0

    value = data.get("best_score") if isinstance(data, dict) else data
    try:
        score = int(value)
    except (TypeError, ValueError):
        log.warning("Best score file %s holds %r — ignoring", p, value)
        return 0
    return max(score, 0)


def save_best_score(score: int, path: str | Path = DEFAULT_BEST_SCORE_PATH) -> None:
    """Write the best score atomically (temp file + rename)."""
    out = Path(path)
    tmp = out.with_suffix(out.suffix + ".tmp")
    try:
        tmp.write_text(yaml.safe_dump({"best_score": int(score)}), encoding="utf-8")
        tmp.replace(out)
        log.info("Best score %d saved to %s", score, out)
    except Exception:
        log.exception("Failed to save best score to %s", out)
        if tmp.exists():
            tmp.unlink(missing_ok=True)
        raise
