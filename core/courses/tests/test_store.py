"""Tests for the persistent course snapshot and single-flight rebuilds."""

import asyncio
import json

import pytest

from core.courses.builder import CourseTreeBuilder
from core.courses.store import CourseStore
from core.courses.types import Course
from core.errors import StorageError, UpstreamError


class CountingBuilder:
    """Builder double returning a fixed tree, optionally after a delay."""

    def __init__(self, courses=None, delay=0.0, error=None):
        self.courses = courses or [Course(id="c1", title="Curso", type="course")]
        self.delay = delay
        self.error = error
        self.calls = 0

    async def build(self, root_folder_id):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.courses)


@pytest.fixture
def snapshot_path(tmp_path):
    return tmp_path / "courses.json"


def _store(builder, path):
    return CourseStore(builder, path=path, root_folder_id=lambda: "root")


class TestLoad:
    @pytest.mark.asyncio
    async def test_first_load_builds_and_saves(self, snapshot_path):
        builder = CountingBuilder()
        store = _store(builder, snapshot_path)

        courses = await store.load()

        assert [c.id for c in courses] == ["c1"]
        assert builder.calls == 1
        assert snapshot_path.exists()

    @pytest.mark.asyncio
    async def test_second_load_reads_snapshot(self, snapshot_path):
        builder = CountingBuilder()
        store = _store(builder, snapshot_path)

        await store.load()
        courses = await store.load()

        assert builder.calls == 1
        assert [c.id for c in courses] == ["c1"]

    @pytest.mark.asyncio
    async def test_snapshot_round_trip_with_real_builder(
        self, backend_training_drive, snapshot_path
    ):
        store = _store(CourseTreeBuilder(backend_training_drive), snapshot_path)

        built = await store.rebuild()
        reread = store.read()

        assert reread == built

    def test_read_missing_snapshot(self, snapshot_path):
        assert _store(CountingBuilder(), snapshot_path).read() is None

    @pytest.mark.asyncio
    async def test_corrupt_snapshot_is_storage_error(self, snapshot_path):
        snapshot_path.write_text("{not json")
        builder = CountingBuilder()

        with pytest.raises(StorageError):
            await _store(builder, snapshot_path).load()
        assert builder.calls == 0

    def test_snapshot_of_wrong_shape_is_storage_error(self, snapshot_path):
        snapshot_path.write_text(json.dumps({"courses": []}))

        with pytest.raises(StorageError):
            _store(CountingBuilder(), snapshot_path).read()

    def test_snapshot_with_missing_fields_is_storage_error(self, snapshot_path):
        snapshot_path.write_text(json.dumps([{"title": "no id"}]))

        with pytest.raises(StorageError):
            _store(CountingBuilder(), snapshot_path).read()


class TestRebuild:
    @pytest.mark.asyncio
    async def test_rebuild_replaces_snapshot(self, snapshot_path):
        store = _store(CountingBuilder(), snapshot_path)
        await store.load()

        store.builder = CountingBuilder([Course(id="c2", title="Outro", type="course")])
        courses = await store.rebuild()

        assert [c.id for c in courses] == ["c2"]
        assert [c.id for c in store.read()] == ["c2"]

    @pytest.mark.asyncio
    async def test_failed_rebuild_keeps_previous_snapshot(self, snapshot_path):
        store = _store(CountingBuilder(), snapshot_path)
        await store.load()

        store.builder = CountingBuilder(error=UpstreamError("drive down"))
        with pytest.raises(UpstreamError):
            await store.rebuild()

        assert [c.id for c in store.read()] == ["c1"]

    @pytest.mark.asyncio
    async def test_failed_force_rebuild_leaves_no_snapshot(self, snapshot_path):
        store = _store(CountingBuilder(), snapshot_path)
        await store.load()

        store.builder = CountingBuilder(error=UpstreamError("drive down"))
        with pytest.raises(UpstreamError):
            await store.rebuild(force=True)

        assert not snapshot_path.exists()
        assert store.read() is None

    @pytest.mark.asyncio
    async def test_first_build_failure_writes_nothing(self, snapshot_path):
        store = _store(CountingBuilder(error=UpstreamError("drive down")), snapshot_path)

        with pytest.raises(UpstreamError):
            await store.load()

        assert not snapshot_path.exists()

    @pytest.mark.asyncio
    async def test_concurrent_rebuilds_share_one_build(self, snapshot_path):
        builder = CountingBuilder(delay=0.05)
        store = _store(builder, snapshot_path)

        results = await asyncio.gather(store.rebuild(), store.rebuild(), store.rebuild())

        assert builder.calls == 1
        assert all([c.id for c in r] == ["c1"] for r in results)

    @pytest.mark.asyncio
    async def test_concurrent_waiters_see_the_failure(self, snapshot_path):
        builder = CountingBuilder(delay=0.05, error=UpstreamError("drive down"))
        store = _store(builder, snapshot_path)

        results = await asyncio.gather(
            store.rebuild(), store.rebuild(), return_exceptions=True
        )

        assert builder.calls == 1
        assert all(isinstance(r, UpstreamError) for r in results)

    @pytest.mark.asyncio
    async def test_sequential_rebuilds_each_build(self, snapshot_path):
        builder = CountingBuilder()
        store = _store(builder, snapshot_path)

        await store.rebuild()
        await store.rebuild()

        assert builder.calls == 2

    @pytest.mark.asyncio
    async def test_delete(self, snapshot_path):
        store = _store(CountingBuilder(), snapshot_path)
        await store.load()

        assert store.delete() is True
        assert store.delete() is False
