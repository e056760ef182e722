"""HTTP endpoints: health check and job submission."""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from wavely.data import Job, PendingJob, PendingJobStore
from wavely.worker import WorkerPool

_log = logging.getLogger("wavely")


def create_app(store: PendingJobStore, pool: WorkerPool) -> Flask:
    """Build the web application that records jobs in ``store`` and hands them to ``pool``."""
    app = Flask("wavely")

    def preflight() -> bool:
        return (request.method == "OPTIONS" and "Origin" in request.headers
                and "Access-Control-Request-Method" in request.headers)

    @app.before_request
    def _preflight():
        return app.response_class(status=204) if preflight() else None

    @app.after_request
    def _cors(response):
        if "Origin" in request.headers:
            headers = response.headers
            headers["Access-Control-Allow-Origin"] = "*"
            headers["Access-Control-Allow-Credentials"] = "true"
            if preflight():
                headers["Access-Control-Allow-Methods"] = "GET,POST"
                headers["Access-Control-Allow-Headers"] = "Origin,Content-Type,Accept"
                headers["Access-Control-Max-Age"] = str(12 * 60 * 60)
            else:
                headers["Access-Control-Expose-Headers"] = "Content-Length"
        return response

    @app.get("/health")
    def health():
        return jsonify(message="ok"), 200

    @app.post("/jobs")
    def new_job():
        try:
            job = Job.from_dict(request.get_json(force=True, silent=True))
        except ValueError as exc:
            _log.warning("Fehler beim Parsen des JSON-Jobs: %s", exc)
            return jsonify(error="Ungültiges JSON-Format"), 400

        pending = PendingJob(job)
        store.append(pending)
        if pool.submit(pending):
            _log.info("Neuer Job empfangen: %s", job.uid)
            return jsonify(message="Job akzeptiert", uid=job.uid), 202
        _log.error("Keine freien worker vorhanden für: %s", job.uid)
        return jsonify(message="Versuche es später nochmal", uid=job.uid), 503

    return app