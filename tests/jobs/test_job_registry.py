"""Tests for chronotrack.jobs.registry.JobRegistry."""

import time

import pytest

from chronotrack.core.errors import ValidationError


class TestCreate:
    def test_fields_and_ids(self, registry):
        first = registry.create("nightly-export", description="Export orders", type="batch")
        second = registry.create("cleanup")
        assert (first.id, second.id) == (1, 2)
        assert first.archived is False
        assert first.created_at == first.updated_at
        assert second.description is None
        assert second.type is None

    @pytest.mark.parametrize("name", ["", "   ", None, 42])
    def test_rejects_bad_names(self, registry, name):
        with pytest.raises(ValidationError):
            registry.create(name)

    def test_rejected_create_does_not_consume_an_id(self, registry):
        with pytest.raises(ValidationError):
            registry.create("")
        assert registry.create("ok").id == 1


class TestQueries:
    def test_get_by_id_miss(self, registry):
        assert registry.get_by_id(999) is None
        assert registry.exists(999) is False

    def test_get_returns_a_copy(self, registry, job):
        fetched = registry.get_by_id(job.id)
        fetched.name = "mutated"
        assert registry.get_by_id(job.id).name == "nightly-export"

    def test_list_hides_archived_by_default(self, registry):
        a = registry.create("a")
        b = registry.create("b")
        c = registry.create("c")
        registry.archive(b.id)
        assert [j.id for j in registry.list()] == [a.id, c.id]
        assert [j.id for j in registry.list(include_archived=True)] == [a.id, b.id, c.id]


class TestUpdate:
    def test_partial_update(self, registry, job):
        time.sleep(0.001)
        updated = registry.update(job.id, description="Export yesterday's orders")
        assert updated.description == "Export yesterday's orders"
        assert updated.name == "nightly-export"
        assert updated.type == "batch"
        assert updated.updated_at > job.updated_at
        assert updated.created_at == job.created_at

    def test_none_clears_optional_field(self, registry, job):
        assert registry.update(job.id, type=None).type is None

    def test_unknown_job(self, registry):
        assert registry.update(999, name="x") is None

    def test_unknown_field(self, registry, job):
        with pytest.raises(ValidationError):
            registry.update(job.id, id=5)

    def test_empty_name(self, registry, job):
        with pytest.raises(ValidationError):
            registry.update(job.id, name="  ")

    def test_archived_must_be_bool(self, registry, job):
        with pytest.raises(ValidationError):
            registry.update(job.id, archived="yes")

    def test_unarchive(self, registry, job):
        registry.archive(job.id)
        assert registry.update(job.id, archived=False).archived is False
        assert [j.id for j in registry.list()] == [job.id]


class TestArchive:
    def test_archive_keeps_record(self, registry, job):
        archived = registry.archive(job.id)
        assert archived.archived is True
        assert registry.get_by_id(job.id).archived is True

    def test_archive_unknown(self, registry):
        assert registry.archive(999) is None
