import threading

import pytest

from wavely.data import PendingJobStore
from wavely.handlers import create_app
from wavely.worker import WorkerPool


def _ignore(_job):
    pass


@pytest.fixture
def store():
    return PendingJobStore()


@pytest.fixture
def client(store):
    app = create_app(store, WorkerPool(_ignore, workers=1))
    app.testing = True
    return app.test_client()


def post_job(client, body):
    return client.post("/jobs", data=body, content_type="application/json")


def test_handle_new_job(client, store):
    resp = post_job(client, '{"uid": "test", "data": {"key": "value"}}')
    assert resp.status_code == 202
    body = resp.get_json()
    assert body["uid"] == "test"
    assert body["message"] == "Job akzeptiert"

    jobs = store.snapshot()
    assert len(jobs) == 1
    assert jobs[0].job.uid == body["uid"]
    assert jobs[0].job.data == {"key": "value"}

    resp = post_job(client, '{"uid": "test-uid", "data": {"key": "value"}}')
    assert resp.status_code == 202
    assert resp.get_json()["uid"] == "test-uid"

    jobs = store.snapshot()
    assert len(jobs) == 2
    assert jobs[1].job.uid == "test-uid"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "ok"}


@pytest.mark.parametrize("body", ["{broken", "[1, 2]", '{"uid": 5}'])
def test_invalid_json_is_rejected(client, store, body):
    resp = post_job(client, body)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Ungültiges JSON-Format"}
    assert len(store) == 0


def test_full_queue_returns_service_unavailable(store):
    app = create_app(store, WorkerPool(_ignore, workers=1, queue_size=1))
    client = app.test_client()
    assert post_job(client, '{"uid": "first"}').status_code == 202
    resp = post_job(client, '{"uid": "second"}')
    assert resp.status_code == 503
    assert resp.get_json() == {"message": "Versuche es später nochmal", "uid": "second"}
    assert [p.job.uid for p in store.snapshot()] == ["first", "second"]


def test_accepted_job_reaches_worker(store):
    seen = []
    lock = threading.Lock()

    def record(pending):
        with lock:
            seen.append((pending.job.uid, pending.job.data))

    pool = WorkerPool(record, workers=2)
    pool.start()
    client = create_app(store, pool).test_client()
    resp = post_job(client, '{"uid": "abc", "data": "value"}')
    pool.stop()
    assert resp.status_code == 202
    assert resp.get_json() == {"message": "Job akzeptiert", "uid": "abc"}
    assert seen == [("abc", "value")]
    assert [p.job.uid for p in store.snapshot()] == ["abc"]


def test_cors_headers_on_simple_request(client):
    resp = client.get("/health", headers={"Origin": "http://localhost"})
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert resp.headers["Access-Control-Allow-Credentials"] == "true"
    assert resp.headers["Access-Control-Expose-Headers"] == "Content-Length"


def test_cors_preflight(client):
    resp = client.options(
        "/jobs",
        headers={"Origin": "http://localhost", "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 204
    assert resp.headers["Access-Control-Allow-Methods"] == "GET,POST"
    assert resp.headers["Access-Control-Allow-Headers"] == "Origin,Content-Type,Accept"
    assert resp.headers["Access-Control-Max-Age"] == "43200"


def test_no_cors_headers_without_origin(client):
    resp = client.get("/health")
    assert "Access-Control-Allow-Origin" not in resp.headers