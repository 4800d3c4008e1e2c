"""
Endpoint tests for run creation, transitions, annotation and history.
"""

PREFIX = "/api/v1"


def _new_run(client, job_id=1, **body):
    resp = client.post(f"{PREFIX}/jobs/{job_id}/runs", json=body or None)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def _transition(client, run_id, **body):
    return client.post(f"{PREFIX}/runs/{run_id}/transition", json=body)


class TestCreateRun:
    def test_defaults(self, client, created_job):
        run = _new_run(client)
        assert run["id"] == 1
        assert run["job_id"] == 1
        assert run["status"] == "PENDING"
        for key in ("started_at", "finished_at", "cancelled_at", "error_message", "metadata"):
            assert key in run and run[key] is None

    def test_with_metadata_and_status(self, client, created_job):
        run = _new_run(client, status="running", metadata={"trigger": "cron"})
        assert run["status"] == "RUNNING"
        assert run["metadata"] == {"trigger": "cron"}

    def test_unknown_job(self, client):
        resp = client.post(f"{PREFIX}/jobs/999/runs")
        assert resp.status_code == 404
        assert resp.json()["errors"][0]["code"] == "JOB_NOT_FOUND"
        assert client.get(f"{PREFIX}/runs/1").status_code == 404

    def test_unknown_status(self, client, created_job):
        resp = client.post(f"{PREFIX}/jobs/1/runs", json={"status": "PAUSED"})
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["code"] == "VALIDATION_FAILED"


class TestTransition:
    def test_lifecycle(self, client, created_job):
        run = _new_run(client)
        started = _transition(client, run["id"], status="RUNNING").json()["data"]
        assert started["status"] == "RUNNING"
        assert started["started_at"] is not None

        failed = _transition(client, run["id"], status="FAILED", error_message="exit code 3")
        assert failed.status_code == 200
        data = failed.json()["data"]
        assert data["error_message"] == "exit code 3"
        assert data["finished_at"] is not None

    def test_explicit_timestamp(self, client, created_job):
        run = _new_run(client)
        data = _transition(
            client, run["id"], status="RUNNING", timestamp="2026-03-01T02:00:00Z"
        ).json()["data"]
        assert data["started_at"].startswith("2026-03-01T02:00:00")

    def test_invalid_transition_is_409(self, client, created_job):
        run = _new_run(client)
        resp = _transition(client, run["id"], status="SUCCESS")
        assert resp.status_code == 409
        body = resp.json()
        assert body["errors"][0]["code"] == "INVALID_TRANSITION"
        assert body["context"] == {"current": "PENDING", "target": "SUCCESS"}

    def test_missing_error_message_is_400(self, client, created_job):
        run = _new_run(client, status="RUNNING")
        resp = _transition(client, run["id"], status="FAILED")
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["code"] == "MISSING_ERROR_MESSAGE"

    def test_unknown_run_is_404(self, client):
        resp = _transition(client, 77, status="RUNNING")
        assert resp.status_code == 404
        assert resp.json()["errors"][0]["code"] == "RUN_NOT_FOUND"

    def test_expected_status_guard(self, client, created_job):
        run = _new_run(client)
        _transition(client, run["id"], status="RUNNING", expected_status="PENDING")
        resp = _transition(client, run["id"], status="CANCELLED", expected_status="PENDING")
        assert resp.status_code == 409
        assert resp.json()["context"] == {"current": "RUNNING", "target": "CANCELLED"}

    def test_archived_job_runs_still_transition(self, client, created_job):
        run = _new_run(client)
        client.post(f"{PREFIX}/jobs/1/archive")
        assert _transition(client, run["id"], status="CANCELLED").status_code == 200


class TestAnnotate:
    def test_merge(self, client, created_job):
        run = _new_run(client, metadata={"a": 1})
        resp = client.patch(f"{PREFIX}/runs/{run['id']}/metadata", json={"metadata": {"b": 2}})
        assert resp.status_code == 200
        assert resp.json()["data"]["metadata"] == {"a": 1, "b": 2}

    def test_unknown_run(self, client):
        resp = client.patch(f"{PREFIX}/runs/3/metadata", json={"metadata": {"b": 2}})
        assert resp.status_code == 404


class TestHistory:
    def test_list_runs(self, client, created_job):
        for _ in range(3):
            _new_run(client)
        body = client.get(f"{PREFIX}/jobs/1/runs").json()
        assert body["total"] == 3
        assert [r["id"] for r in body["data"]] == [1, 2, 3]

    def test_unknown_job_is_empty(self, client):
        resp = client.get(f"{PREFIX}/jobs/999/runs")
        assert resp.status_code == 200
        assert resp.json()["data"] == []
        assert resp.json()["total"] == 0
