"""Job records, configuration structures and the shared pending-job store."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any

from wavely.auth import AuthConfig, AuthProvider

DEFAULT_PORT = "4224"


@dataclass
class Job:
    uid: str = ""
    data: Any = ""
    content_type: str = ""

    def to_dict(self) -> dict[str, Any]:
        items = {"uid": self.uid, "data": self.data, "content_type": self.content_type}
        return {key: value for key, value in items.items() if value}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Job:
        if not isinstance(raw, dict):
            raise ValueError("job must be a JSON object")
        uid, content_type = raw.get("uid") or "", raw.get("content_type") or ""
        if not isinstance(uid, str) or not isinstance(content_type, str):
            raise ValueError("uid and content_type must be strings")
        return cls(uid, raw.get("data", ""), content_type)


@dataclass
class PendingJob:
    job: Job
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    attempts: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"Job": self.job.to_dict(), "CreatedAt": self.created_at.isoformat(),
                "Attempts": self.attempts}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> PendingJob:
        created = raw["CreatedAt"]
        if created.endswith("Z"):
            created = created[:-1] + "+00:00"
        return cls(Job.from_dict(raw.get("Job", {})), datetime.fromisoformat(created),
                   int(raw.get("Attempts", 0)))


@dataclass
class Revision:
    latest_revision: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Revision:
        return cls(raw.get("latest_revision") or "")


@dataclass
class EndpointConfig:
    check: str = ""
    revision: str = ""
    write: str = ""


@dataclass
class CurrentConfig:
    name: str = ""
    base_url: str = ""
    endpoints: EndpointConfig = field(default_factory=EndpointConfig)
    content_type: str = ""
    auth: AuthConfig = field(default_factory=AuthConfig)
    repetitions: int = 0
    min_workers: int = 0
    max_workers: int = 0
    parsed_check_tpl: Any = None
    parsed_revision_tpl: Any = None
    parsed_write_tpl: Any = None
    auth_provider: AuthProvider | None = None


@dataclass
class WavelyConfig:
    port: str = DEFAULT_PORT
    debug: bool = False
    current: CurrentConfig = field(default_factory=CurrentConfig)

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None) -> WavelyConfig:
        raw = raw or {}
        cur = raw.get("current") or {}
        eps = cur.get("endpoints") or {}

        def text(src: dict[str, Any], key: str) -> str:
            return str(src.get(key, "") or "")

        auth_names = {f.name for f in fields(AuthConfig)}
        auth = {k: str(v) for k, v in (cur.get("auth") or {}).items() if k in auth_names}
        min_workers = int(cur.get("min_workers") or 0)
        current = CurrentConfig(
            name=text(cur, "name"),
            base_url=text(cur, "base_url"),
            endpoints=EndpointConfig(*(text(eps, k) for k in ("check", "revision", "write"))),
            content_type=text(cur, "content_type"),
            auth=AuthConfig(**auth),
            repetitions=int(cur.get("repetitions") or 0),
            min_workers=min_workers,
            max_workers=int(cur.get("max_workers", min_workers) or 0),
        )
        return cls(str(raw.get("port", DEFAULT_PORT)), bool(raw.get("debug", False)), current)


class PendingJobStore:
    """Thread-safe list of jobs that have not been written yet."""

    def __init__(self, jobs: list[PendingJob] | None = None) -> None:
        self._jobs: list[PendingJob] = list(jobs or [])
        self._lock = threading.Lock()

    def append(self, job: PendingJob) -> None:
        with self._lock:
            self._jobs.append(job)

    def remove_uid(self, uid: str) -> bool:
        """Remove the first job with ``uid``; return whether one was removed."""
        with self._lock:
            found = next((p for p in self._jobs if p.job.uid == uid), None)
            if found is not None:
                self._jobs.remove(found)
            return found is not None

    def snapshot(self) -> list[PendingJob]:
        with self._lock:
            return list(self._jobs)

    def replace(self, jobs: list[PendingJob]) -> None:
        with self._lock:
            self._jobs = list(jobs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)