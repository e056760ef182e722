"""Saving pending jobs to a JSON file and restoring them on start-up."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from wavely.data import PendingJob, PendingJobStore

PERSISTENCE_FILE = "/app/cache/pending_jobs.json"

_log = logging.getLogger("wavely")


def save_pending_jobs(store: PendingJobStore, path: str | Path = PERSISTENCE_FILE) -> int:
    """Write the store's jobs to ``path``; return how many were written.

    Nothing is written when the store is empty. Failures are logged and
    reported as zero jobs written.
    """
    jobs = store.snapshot()
    if not jobs:
        _log.info("Es stehen keine ausstehenden Jobs an.")
        return 0
    try:
        text = json.dumps([job.to_dict() for job in jobs], indent=2)
    except (TypeError, ValueError) as exc:
        _log.error("Fehler beim Serialisieren der ausstehenden Jobs: %s", exc)
        return 0
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as exc:
        _log.error("Fehler beim Speichern der ausstehenden Jobs in die Datei %s: %s", path, exc)
        return 0
    _log.info("Ausstehende Jobs in Datei gespeichert: %s (%d)", path, len(jobs))
    return len(jobs)


def restore_pending_jobs(store: PendingJobStore,
                         path: str | Path = PERSISTENCE_FILE) -> list[PendingJob]:
    """Replace the store's contents with the jobs saved at ``path`` and return them.

    A missing or unreadable file leaves the store untouched and yields an empty list.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except OSError as exc:
        _log.error("Fehler beim Lesen der ausstehenden Jobs aus der Datei %s: %s", path, exc)
        return []
    try:
        raw = json.loads(text)
        if raw is None:
            raw = []
        if not isinstance(raw, list):
            raise ValueError("expected a JSON array")
        jobs = [PendingJob.from_dict(item) for item in raw]
    except (ValueError, TypeError, KeyError, AttributeError) as exc:
        _log.error("Fehler beim Deserialisieren der ausstehenden Jobs aus %s: %s", path, exc)
        return []
    store.replace(jobs)
    _log.info("Ausstehende Jobs aus Datei wiederhergestellt: %s (%d)", path, len(jobs))
    return jobs