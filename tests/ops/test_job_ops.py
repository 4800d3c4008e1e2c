"""Tests for chronotrack.ops.jobs."""

from chronotrack.ops.jobs import archive_job, create_job, get_job, list_jobs, update_job
from chronotrack.ops.requests import (
    ArchiveJobRequest,
    CreateJobRequest,
    GetJobRequest,
    ListJobsRequest,
    UpdateJobRequest,
)


class TestCreateJob:
    def test_success(self, ctx):
        result = create_job(ctx, CreateJobRequest(name="nightly-export", type="batch"))
        assert result.success
        assert result.data.id == 1
        assert result.data.type == "batch"
        assert result.elapsed_ms >= 0

    def test_empty_name(self, ctx):
        result = create_job(ctx, CreateJobRequest(name=""))
        assert not result.success
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.details == {"field": "name"}


class TestListJobs:
    def test_default_request(self, ctx):
        create_job(ctx, CreateJobRequest(name="a"))
        b = create_job(ctx, CreateJobRequest(name="b")).data
        archive_job(ctx, ArchiveJobRequest(job_id=b.id))

        visible = list_jobs(ctx)
        assert visible.success
        assert visible.total == 1
        assert [j.name for j in visible.data] == ["a"]

        everything = list_jobs(ctx, ListJobsRequest(include_archived=True))
        assert everything.total == 2

    def test_to_dict(self, ctx):
        create_job(ctx, CreateJobRequest(name="a"))
        d = list_jobs(ctx).to_dict()
        assert d["success"] is True
        assert d["total"] == 1
        assert d["data"][0]["name"] == "a"


class TestGetJob:
    def test_found(self, ctx):
        job = create_job(ctx, CreateJobRequest(name="a")).data
        assert get_job(ctx, GetJobRequest(job_id=job.id)).data == job

    def test_not_found(self, ctx):
        result = get_job(ctx, GetJobRequest(job_id=999))
        assert not result.success
        assert result.error.code == "NOT_FOUND"
        assert result.error.details == {"job_id": 999}


class TestUpdateJob:
    def test_partial(self, ctx):
        job = create_job(ctx, CreateJobRequest(name="a", description="old")).data
        result = update_job(ctx, UpdateJobRequest(job_id=job.id, changes={"description": "new"}))
        assert result.success
        assert result.data.description == "new"
        assert result.data.name == "a"

    def test_not_found(self, ctx):
        result = update_job(ctx, UpdateJobRequest(job_id=5, changes={"name": "x"}))
        assert result.error.code == "NOT_FOUND"

    def test_invalid_field(self, ctx):
        job = create_job(ctx, CreateJobRequest(name="a")).data
        result = update_job(ctx, UpdateJobRequest(job_id=job.id, changes={"created_at": None}))
        assert result.error.code == "VALIDATION_FAILED"


class TestArchiveJob:
    def test_archive(self, ctx):
        job = create_job(ctx, CreateJobRequest(name="a")).data
        result = archive_job(ctx, ArchiveJobRequest(job_id=job.id))
        assert result.success
        assert result.data.archived is True

    def test_not_found(self, ctx):
        assert archive_job(ctx, ArchiveJobRequest(job_id=3)).error.code == "NOT_FOUND"
