"""Tests for history, version inspection and checkout."""

import pytest

from gvt.core.history import HistoryEntry, HistoryInspector, render_history
from gvt.core.tracking import FileTracker
from gvt.core.version_store import VersionStore
from gvt.errors import InvalidVersion, VersionNotFound


@pytest.fixture
def store(workdir):
    store = VersionStore(workdir)
    store.initialize()
    return store


@pytest.fixture
def tracker(store):
    return FileTracker(store)


@pytest.fixture
def inspector(store):
    return HistoryInspector(store)


def test_scenario_track_record_checkout(workdir, store, tracker, inspector):
    (workdir / "a.txt").write_text("hi")
    assert tracker.track("a.txt").version == 1

    (workdir / "a.txt").write_text("bye")
    assert tracker.record("a.txt").version == 2
    assert (store.version_dir(1) / "a.txt").read_text() == "hi"
    assert (store.version_dir(2) / "a.txt").read_text() == "bye"

    assert inspector.checkout(1) == 1
    assert (workdir / "a.txt").read_text() == "hi"

    lines = [entry.render() for entry in inspector.history()]
    assert lines == [
        "2: File committed successfully. File: a.txt",
        "1: File added successfully. File: a.txt",
        "0: repository initialized",
    ]


class TestHistory:
    @pytest.fixture(autouse=True)
    def _three_versions(self, store):
        store.create_version("one")
        store.create_version("two\nmore detail")
        store.create_version("three")

    def test_newest_first(self, inspector):
        ids = [entry.id for entry in inspector.history()]

        assert ids == [3, 2, 1, 0]

    def test_first_line_only(self, inspector):
        entries = inspector.history()

        assert entries[1] == HistoryEntry(id=2, summary="two")

    def test_limit(self, inspector):
        assert [e.id for e in inspector.history(2)] == [3, 2]

    @pytest.mark.parametrize("limit", [4, 10])
    def test_limit_not_smaller_than_count_ignored(self, inspector, limit):
        assert [e.id for e in inspector.history(limit)] == [3, 2, 1, 0]

    def test_limit_zero(self, inspector):
        assert inspector.history(0) == []

    def test_negative_limit_rejected(self, inspector):
        with pytest.raises(ValueError):
            inspector.history(-1)

    def test_render(self, inspector):
        assert render_history(inspector.history(2)) == "3: three\n2: two\n"


class TestShowVersion:
    def test_defaults_to_latest(self, store, inspector):
        store.create_version("latest message\nbody")

        info = inspector.show_version()

        assert info.id == 1
        assert info.message == "latest message\nbody"
        assert info.render() == "Version: 1\nlatest message\nbody"

    def test_explicit_version_from_string(self, store, inspector):
        store.create_version("one")

        assert inspector.show_version("0").message == "repository initialized"

    @pytest.mark.parametrize("raw", ["99", "abc", "-1", "1.5", None])
    def test_invalid_version(self, store, inspector, raw):
        store.create_version("one")
        store.create_version("two")

        with pytest.raises(InvalidVersion) as exc:
            inspector.resolve(raw)
        assert exc.value.raw == ("" if raw is None else raw)

    def test_show_version_out_of_range(self, store, inspector):
        store.create_version("one")
        store.create_version("two")

        with pytest.raises(InvalidVersion):
            inspector.show_version(99)

    def test_invalid_version_is_version_not_found(self, inspector):
        with pytest.raises(VersionNotFound):
            inspector.show_version(5)


class TestCheckout:
    def test_checkout_keeps_extra_files(self, workdir, tracker, inspector):
        (workdir / "a.txt").write_text("hi")
        tracker.track("a.txt")
        (workdir / "a.txt").write_text("edited")
        (workdir / "untracked.txt").write_text("mine")

        inspector.checkout("1")

        assert (workdir / "a.txt").read_text() == "hi"
        assert (workdir / "untracked.txt").read_text() == "mine"

    def test_checkout_version_zero_is_noop(self, workdir, tracker, inspector):
        (workdir / "a.txt").write_text("hi")
        tracker.track("a.txt")
        (workdir / "a.txt").write_text("edited")

        inspector.checkout(0)

        assert (workdir / "a.txt").read_text() == "edited"

    def test_checkout_does_not_copy_message(self, workdir, store, inspector):
        store.create_version("msg")

        inspector.checkout(1)

        assert not (workdir / ".message").exists()

    def test_checkout_restores_nested_files(self, workdir, tracker, inspector):
        (workdir / "sub").mkdir()
        (workdir / "sub" / "c.txt").write_text("sea")
        tracker.track("sub/c.txt")
        (workdir / "sub" / "c.txt").unlink()
        (workdir / "sub").rmdir()

        inspector.checkout(1)

        assert (workdir / "sub" / "c.txt").read_text() == "sea"

    def test_checkout_invalid(self, inspector):
        with pytest.raises(InvalidVersion):
            inspector.checkout("latest")

    def test_round_trip_after_unrelated_track(self, workdir, store, tracker, inspector):
        (workdir / "a.txt").write_text("one")
        (workdir / "b.txt").write_text("two")
        tracker.track("a.txt")
        tracker.track("b.txt")

        inspector.checkout(2)
        (workdir / "c.txt").write_text("three")
        tracker.track("c.txt")

        for name in store.contents(2):
            assert (workdir / name).read_bytes() == (store.version_dir(2) / name).read_bytes()
