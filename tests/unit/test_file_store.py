"""
Tests for the per-record file store.

Covers round-trips, on-disk format, corrupt record handling, id safety
and write-failure isolation.
"""

from __future__ import annotations

import json
import os
from datetime import UTC, datetime
from pathlib import Path

import pytest

from enzo_blog.adapters.fs.post_store import FilePostRepo
from enzo_blog.components.posts import (
    CorruptRecordError,
    InvalidPostIdError,
    PostStore,
    StorageError,
)
from enzo_blog.domain.entities import Post

T0 = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)


def make_post(post_id: str = "abc", **overrides) -> Post:
    data = {
        "id": post_id,
        "title": "Title",
        "content": "Body",
        "format": "markdown",
        "created_at": T0,
        "updated_at": T0,
    }
    data.update(overrides)
    return Post(**data)


@pytest.fixture
def repo(tmp_path: Path) -> FilePostRepo:
    return FilePostRepo(tmp_path / "posts")


class TestRoundTrip:
    def test_save_and_get(self, repo: FilePostRepo) -> None:
        post = make_post()
        repo.save(post)

        loaded = repo.get_by_id("abc")

        assert loaded == post
        assert repo.exists("abc")

    def test_missing_returns_none(self, repo: FilePostRepo) -> None:
        assert repo.get_by_id("nope") is None
        assert repo.exists("nope") is False

    def test_save_overwrites(self, repo: FilePostRepo) -> None:
        repo.save(make_post(title="One"))
        repo.save(make_post(title="Two"))

        assert repo.get_by_id("abc").title == "Two"
        assert len(repo.list_all()) == 1

    def test_delete(self, repo: FilePostRepo) -> None:
        repo.save(make_post())

        assert repo.delete("abc") is True
        assert repo.delete("abc") is False
        assert repo.get_by_id("abc") is None

    def test_survives_new_instance(self, tmp_path: Path) -> None:
        FilePostRepo(tmp_path / "posts").save(make_post("p1"))

        reopened = FilePostRepo(tmp_path / "posts")

        assert [p.id for p in reopened.list_all()] == ["p1"]


class TestOnDiskFormat:
    def test_indented_json_with_wire_names(self, repo: FilePostRepo) -> None:
        repo.save(make_post())

        raw = (repo.base_path / "abc.json").read_text(encoding="utf-8")
        data = json.loads(raw)

        assert raw.startswith("{\n    ")
        assert raw.endswith("}\n")
        assert set(data) == {"id", "title", "content", "format", "createdAt", "updatedAt"}
        assert data["createdAt"].startswith("2025-01-02T03:04:05")

    def test_non_ascii_kept(self, repo: FilePostRepo) -> None:
        repo.save(make_post(title="Café ☕"))
        raw = (repo.base_path / "abc.json").read_text(encoding="utf-8")
        assert "Café ☕" in raw

    def test_no_temp_files_left(self, repo: FilePostRepo) -> None:
        for i in range(3):
            repo.save(make_post(f"p{i}"))

        names = sorted(p.name for p in repo.base_path.iterdir())

        assert names == ["p0.json", "p1.json", "p2.json"]

    def test_reads_hand_written_record(self, repo: FilePostRepo) -> None:
        (repo.base_path / "legacy.json").write_text(
            json.dumps(
                {
                    "id": "legacy",
                    "title": "Old",
                    "content": "text",
                    "createdAt": "2024-05-01T10:00:00.000Z",
                    "updatedAt": "2024-05-02T10:00:00.000Z",
                }
            ),
            encoding="utf-8",
        )

        post = repo.get_by_id("legacy")

        assert post is not None
        assert post.format == "markdown"
        assert post.updated_at == datetime(2024, 5, 2, 10, 0, tzinfo=UTC)


class TestCorruptRecords:
    def test_invalid_json_raises_on_get(self, repo: FilePostRepo) -> None:
        (repo.base_path / "bad.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(CorruptRecordError):
            repo.get_by_id("bad")

    def test_missing_fields_raise_on_get(self, repo: FilePostRepo) -> None:
        (repo.base_path / "bad.json").write_text('{"title": "x"}', encoding="utf-8")

        with pytest.raises(CorruptRecordError):
            repo.get_by_id("bad")

    def test_list_skips_corrupt_and_foreign_files(self, repo: FilePostRepo) -> None:
        repo.save(make_post("good"))
        (repo.base_path / "bad.json").write_text("[1, 2]", encoding="utf-8")
        (repo.base_path / "notes.txt").write_text("hello", encoding="utf-8")
        (repo.base_path / ".good.abc.tmp").write_text("partial", encoding="utf-8")
        (repo.base_path / "has space.json").write_text("{}", encoding="utf-8")

        assert [p.id for p in repo.list_all()] == ["good"]

    def test_file_name_wins_over_stored_id(self, repo: FilePostRepo) -> None:
        record = make_post("other").to_record()
        (repo.base_path / "real.json").write_text(json.dumps(record), encoding="utf-8")

        assert repo.get_by_id("real").id == "real"


class TestIdSafety:
    @pytest.mark.parametrize("bad_id", ["../escape", "a/b", "", "a b", "x.json"])
    def test_invalid_ids_never_touch_disk(self, repo: FilePostRepo, bad_id: str) -> None:
        assert repo.get_by_id(bad_id) is None
        assert repo.exists(bad_id) is False
        assert repo.delete(bad_id) is False

    def test_save_rejects_invalid_id(self, repo: FilePostRepo) -> None:
        with pytest.raises(InvalidPostIdError):
            repo.save(make_post("../escape"))

        assert not (repo.base_path.parent / "escape.json").exists()


class TestWriteFailure:
    def test_failed_write_leaves_other_records(
        self, repo: FilePostRepo, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        repo.save(make_post("keep", title="Original"))

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", broken_replace)

        with pytest.raises(StorageError):
            repo.save(make_post("keep", title="Changed"))
        with pytest.raises(StorageError):
            repo.save(make_post("new"))

        monkeypatch.undo()
        assert repo.get_by_id("keep").title == "Original"
        assert repo.get_by_id("new") is None
        assert sorted(p.name for p in repo.base_path.iterdir()) == ["keep.json"]


class TestWithPostStore:
    def test_store_lifecycle_on_disk(self, tmp_path: Path) -> None:
        store = PostStore(repo=FilePostRepo(tmp_path))

        post = store.create("Hello", "**hi**")
        assert (tmp_path / f"{post.id}.json").is_file()

        store.update(post.id, {"title": "Hello again"})
        restarted = PostStore(repo=FilePostRepo(tmp_path))
        assert restarted.get(post.id).title == "Hello again"

        restarted.delete(post.id)
        assert not (tmp_path / f"{post.id}.json").exists()
