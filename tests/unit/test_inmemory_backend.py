"""Tests for the in-memory backend, driven through a ModelManager."""

from __future__ import annotations

import pytest
import pytest_asyncio

from rev_models.backends.inmemory import InMemoryBackend
from rev_models.errors import OperationError, UsageError
from rev_models.fields import auto_number_field, integer_field, text_field
from rev_models.models.manager import ModelManager
from rev_models.models.model import Model
from rev_models.operations.options import ReadOptions, RemoveOptions, UpdateOptions
from rev_models.operations.result import ModelOperation, ModelOperationResult


class Post(Model):
    fields = [
        auto_number_field("id", primary_key=True),
        text_field("title"),
        integer_field("rating", required=False),
    ]


class Tag(Model):
    fields = [text_field("name", primary_key=True)]


class Comment(Model):
    fields = [text_field("comment"), integer_field("score", required=False)]


class Ticket(Model):
    fields = [text_field("code", primary_key=True), auto_number_field("position")]


@pytest_asyncio.fixture
async def seeded(manager: ModelManager, backend: InMemoryBackend) -> ModelManager:
    manager.register(Post)
    manager.register(Tag)
    manager.register(Comment)
    await backend.load(
        manager,
        Post,
        [{"id": i, "title": f"Post {i}", "rating": i % 3} for i in range(1, 6)],
    )
    return manager


def post_ids(backend: InMemoryBackend) -> list[int]:
    return [r["id"] for r in backend.get_records(Post)]


class TestCreate:
    @pytest.mark.asyncio
    async def test_assigns_auto_numbers(self, manager: ModelManager) -> None:
        manager.register(Post)
        first = await manager.create(Post(title="one"))
        second = await manager.create(Post(title="two"))
        assert first.success
        assert first.result == Post(id=1, title="one")
        assert second.result.id == 2  # type: ignore[union-attr]

    @pytest.mark.asyncio
    async def test_sequence_continues_after_load(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        created = await seeded.create(Post(title="six"))
        assert created.result.id == 6  # type: ignore[union-attr]
        assert post_ids(backend)[-1] == 6

    @pytest.mark.asyncio
    async def test_stores_declared_fields_only(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        await seeded.create(Tag(name="python", colour="green"))
        assert backend.get_records(Tag) == [{"name": "python"}]

    @pytest.mark.asyncio
    async def test_duplicate_primary_key(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        await seeded.create(Tag(name="python"))
        with pytest.raises(OperationError, match="Duplicate primary key") as info:
            await seeded.create(Tag(name="python"))
        error = info.value.result.errors[0]
        assert error["code"] == "duplicate_primary_key"
        assert error["field"] == "name"
        assert len(backend.get_records(Tag)) == 1

    @pytest.mark.asyncio
    async def test_rejected_create_leaves_no_gap(
        self, manager: ModelManager, backend: InMemoryBackend
    ) -> None:
        manager.register(Ticket)
        await manager.create(Ticket(code="A-1"))
        with pytest.raises(OperationError, match="Duplicate primary key"):
            await manager.create(Ticket(code="A-1"))
        created = await manager.create(Ticket(code="A-2"))
        assert created.result.position == 2  # type: ignore[union-attr]
        assert [r["position"] for r in backend.get_records(Ticket)] == [1, 2]

    @pytest.mark.asyncio
    async def test_stored_record_is_a_copy(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        tag = Tag(name="python")
        await seeded.create(tag)
        tag.name = "changed"  # type: ignore[attr-defined]
        assert backend.get_records(Tag) == [{"name": "python"}]


class TestRead:
    @pytest.mark.asyncio
    async def test_read_all(self, seeded: ModelManager) -> None:
        result = await seeded.read(Post)
        assert [p.id for p in result.results] == [1, 2, 3, 4, 5]  # type: ignore[union-attr]
        assert result.meta == {"offset": 0, "limit": 20, "totalCount": 5}
        assert all(isinstance(p, Post) for p in result.results)  # type: ignore[union-attr]

    @pytest.mark.asyncio
    async def test_offset_and_limit(self, seeded: ModelManager) -> None:
        result = await seeded.read(Post, {"offset": 1, "limit": 1})
        assert [p.id for p in result.results] == [2]  # type: ignore[union-attr]
        assert result.meta == {"offset": 1, "limit": 1, "totalCount": 5}

    @pytest.mark.asyncio
    async def test_total_count_counts_all_matches(self, seeded: ModelManager) -> None:
        result = await seeded.read(Post, {"where": {"id": {"_gt": 1}}, "limit": 2})
        assert [p.id for p in result.results] == [2, 3]  # type: ignore[union-attr]
        assert result.meta["totalCount"] == 4  # type: ignore[index]

    @pytest.mark.asyncio
    async def test_offset_past_end(self, seeded: ModelManager) -> None:
        result = await seeded.read(Post, {"offset": 10})
        assert result.results == []
        assert result.meta["totalCount"] == 5  # type: ignore[index]

    @pytest.mark.asyncio
    async def test_order_by(self, seeded: ModelManager) -> None:
        result = await seeded.read(Post, ReadOptions(order_by=["rating desc", "id"]))
        assert [p.id for p in result.results] == [2, 5, 1, 4, 3]  # type: ignore[union-attr]

    @pytest.mark.asyncio
    async def test_unknown_field_is_an_operation_error(self, seeded: ModelManager) -> None:
        with pytest.raises(OperationError, match="not a recognised field of Post") as info:
            await seeded.read(Post, {"where": {"author": "bob"}})
        assert info.value.result.errors[0]["code"] == "invalid_query"
        assert info.value.result.results is None

    @pytest.mark.asyncio
    async def test_bad_order_by_is_an_operation_error(self, seeded: ModelManager) -> None:
        with pytest.raises(OperationError) as info:
            await seeded.read(Post, {"order_by": ["author"]})
        assert info.value.result.errors[0]["code"] == "invalid_order_by"

    @pytest.mark.asyncio
    async def test_order_by_mixed_value_types(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        await backend.load(seeded, Post, [{"id": 6, "title": 5}])
        with pytest.raises(OperationError, match="not comparable") as info:
            await seeded.read(Post, {"order_by": ["title"]})
        error = info.value.result.errors[0]
        assert error["code"] == "invalid_order_by"
        assert error["fields"] == ["title"]
        assert info.value.result.results is None

    @pytest.mark.asyncio
    async def test_results_are_detached(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        result = await seeded.read(Post, {"where": {"id": 1}})
        result.results[0].title = "edited"  # type: ignore[index]
        assert backend.get_records(Post)[0]["title"] == "Post 1"


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_by_primary_key(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        result = await seeded.update(Post(id=3, title="Third"))
        assert result.meta == {"totalCount": 1}
        assert backend.get_records(Post)[2] == {"id": 3, "title": "Third", "rating": 0}

    @pytest.mark.asyncio
    async def test_update_with_where_and_fields(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        result = await seeded.update(
            Post(title="ignored", rating=9),
            {"where": {"id": {"_in": [1, 2]}}, "fields": ["rating"]},
        )
        assert result.meta == {"totalCount": 2}
        records = backend.get_records(Post)
        assert [r["rating"] for r in records] == [9, 9, 0, 1, 2]
        assert records[0]["title"] == "Post 1"

    @pytest.mark.asyncio
    async def test_update_no_match(self, seeded: ModelManager) -> None:
        result = await seeded.update(Post(id=99, title="none"))
        assert result.success
        assert result.meta == {"totalCount": 0}

    @pytest.mark.asyncio
    async def test_direct_call_requires_where(self, seeded: ModelManager) -> None:
        backend = InMemoryBackend()
        result: ModelOperationResult = ModelOperationResult(ModelOperation("update"))
        with pytest.raises(UsageError, match="update\\(\\) requires the 'where' option"):
            await backend.update(seeded, Post(id=1), UpdateOptions(where=None), result)

    @pytest.mark.asyncio
    async def test_direct_call_without_where_updates_all(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        result: ModelOperationResult = ModelOperationResult(ModelOperation("update"))
        await backend.update(seeded, Post(rating=7), UpdateOptions(), result)
        assert result.success
        assert result.meta == {"totalCount": 5}
        assert [r["rating"] for r in backend.get_records(Post)] == [7, 7, 7, 7, 7]

    @pytest.mark.asyncio
    async def test_primary_key_onto_several_records(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        with pytest.raises(OperationError, match="Duplicate primary key") as info:
            await seeded.update(Post(id=1, title="x"), {"where": {"id": {"_in": [2, 3]}}})
        error = info.value.result.errors[0]
        assert error["code"] == "duplicate_primary_key"
        assert error["matched"] == 2
        assert post_ids(backend) == [1, 2, 3, 4, 5]
        assert backend.get_records(Post)[1]["title"] == "Post 2"

    @pytest.mark.asyncio
    async def test_primary_key_held_by_another_record(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        with pytest.raises(OperationError, match="Duplicate primary key"):
            await seeded.update(Post(id=4, title="x"), {"where": {"id": 2}})
        assert post_ids(backend) == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_primary_key_moved_to_a_free_value(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        result = await seeded.update(Post(id=10, title="Moved"), {"where": {"id": 2}})
        assert result.meta == {"totalCount": 1}
        assert post_ids(backend) == [1, 10, 3, 4, 5]
        created = await seeded.create(Post(title="next"))
        assert created.result.id == 11  # type: ignore[union-attr]


class TestRemove:
    @pytest.mark.asyncio
    async def test_remove_with_in(self, seeded: ModelManager, backend: InMemoryBackend) -> None:
        result = await seeded.remove(Post(), {"where": {"id": {"_in": [2, 3]}}})
        assert result.meta == {"totalCount": 2}
        assert post_ids(backend) == [1, 4, 5]

    @pytest.mark.asyncio
    async def test_remove_is_idempotent(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        await seeded.remove(Post(id=2))
        again = await seeded.remove(Post(id=2))
        assert again.success
        assert again.meta == {"totalCount": 0}
        assert post_ids(backend) == [1, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_empty_where_removes_everything(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        result = await seeded.remove(Post(), {"where": {}})
        assert result.meta == {"totalCount": 5}
        assert backend.get_records(Post) == []

    @pytest.mark.asyncio
    async def test_keyless_model(self, seeded: ModelManager, backend: InMemoryBackend) -> None:
        await seeded.create(Comment(comment="first", score=1))
        await seeded.create(Comment(comment="second", score=5))
        result = await seeded.remove(Comment(), {"where": {"score": {"_lt": 3}}})
        assert result.meta == {"totalCount": 1}
        assert backend.get_records(Comment) == [{"comment": "second", "score": 5}]

    @pytest.mark.asyncio
    async def test_unknown_field(self, seeded: ModelManager, backend: InMemoryBackend) -> None:
        with pytest.raises(OperationError, match="not a recognised field"):
            await seeded.remove(Post(), {"where": {"author": "bob"}})
        assert len(backend.get_records(Post)) == 5

    @pytest.mark.asyncio
    async def test_direct_call_requires_where(self, seeded: ModelManager) -> None:
        backend = InMemoryBackend()
        result: ModelOperationResult = ModelOperationResult(ModelOperation("remove"))
        with pytest.raises(UsageError, match="remove\\(\\) requires the 'where' option"):
            await backend.remove(seeded, Post(), RemoveOptions(where=None), result)

    @pytest.mark.asyncio
    async def test_direct_call_without_where_removes_everything(
        self, seeded: ModelManager, backend: InMemoryBackend
    ) -> None:
        result: ModelOperationResult = ModelOperationResult(ModelOperation("remove"))
        await backend.remove(seeded, Post(), RemoveOptions(), result)
        assert result.success
        assert result.meta == {"totalCount": 5}
        assert backend.get_records(Post) == []


class TestLoad:
    @pytest.mark.asyncio
    async def test_load_instances(self, manager: ModelManager, backend: InMemoryBackend) -> None:
        manager.register(Tag)
        await backend.load(manager, Tag, [Tag(name="a"), {"name": "b", "other": 1}])
        assert backend.get_records(Tag) == [{"name": "a"}, {"name": "b"}]

    @pytest.mark.asyncio
    async def test_load_rejects_other_values(
        self, manager: ModelManager, backend: InMemoryBackend
    ) -> None:
        manager.register(Tag)
        with pytest.raises(UsageError):
            await backend.load(manager, Tag, ["a"])  # type: ignore[list-item]
