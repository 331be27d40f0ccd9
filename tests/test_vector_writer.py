# tests/test_vector_writer.py
"""Tests for the vector upsert pipeline and write-confirmation normalization."""

import logging
from enum import Enum
from unittest.mock import MagicMock

import pytest

from citerag.core.chunk import Chunk
from citerag.core.exceptions import QueryError, VectorStoreError
from citerag.core.records import DocumentMetadata
from citerag.vector_db.plugins.memory import InMemoryVectorStore
from citerag.vector_db.writer import VectorUpsertPipeline, build_records, confirmed_count

META = DocumentMetadata(doc_id="doc-7", title="Handbook", source="upload", url="https://example.com/h")


def make_chunks(n):
    return [Chunk(text=f"chunk {i}", position=i) for i in range(n)]


def make_vectors(n, dim=3):
    return [[float(i)] * dim for i in range(n)]


def make_store(write_side_effect=None):
    store = MagicMock()
    store.collection = "TestChunks"
    store.write_batch.side_effect = write_side_effect or (lambda records: [r.chunk_id for r in records])
    return store


class TestBuildRecords:
    def test_metadata_stamped_on_every_record(self):
        """doc-level fields are shared; chunk fields come from each chunk."""
        records = build_records(make_chunks(3), make_vectors(3), META)

        assert [r.position for r in records] == [0, 1, 2]
        assert {r.doc_id for r in records} == {"doc-7"}
        assert {r.title for r in records} == {"Handbook"}
        assert {r.url for r in records} == {"https://example.com/h"}
        assert records[1].text == "chunk 1"
        assert records[1].vector == [1.0, 1.0, 1.0]

    def test_chunk_ids_are_fresh_and_unique(self):
        """Every record gets its own chunk_id."""
        first = build_records(make_chunks(5), make_vectors(5), META)
        second = build_records(make_chunks(5), make_vectors(5), META)

        ids = [r.chunk_id for r in first + second]
        assert len(set(ids)) == 10

    def test_payload_excludes_vector(self):
        """The persisted payload has every field except the vector."""
        payload = build_records(make_chunks(1), make_vectors(1), META)[0].payload()
        assert "vector" not in payload
        assert payload["published_at"] == ""
        assert payload["section"] == "body"


class TestConfirmedCount:
    class Status(Enum):
        COMPLETED = "completed"

    @pytest.mark.parametrize(
        "response, expected",
        [
            (["a", "b", "c"], 3),
            ({"results": {"objects": [1, 2]}}, 2),
            ({"count": 4}, 4),
            ({"status": "completed"}, 10),
            ({"status": "acknowledged"}, 10),
            ({"status": "failed"}, 0),
            ({}, 0),
            (None, 0),
        ],
    )
    def test_response_shapes(self, response, expected):
        """Every supported shape reduces to an integer."""
        assert confirmed_count(response, sent=10) == expected

    def test_status_enum_object(self):
        """Status enums on SDK objects are read through their value."""
        response = MagicMock(spec=["status"])
        response.status = self.Status.COMPLETED
        assert confirmed_count(response, sent=7) == 7


class TestVectorUpsertPipeline:
    def test_batches_of_fixed_size(self):
        """450 records at batch size 200 are written in three calls."""
        store = make_store()

        inserted = VectorUpsertPipeline(store, batch_size=200).upsert(
            make_chunks(450), make_vectors(450), META
        )

        sizes = [len(call.args[0]) for call in store.write_batch.call_args_list]
        assert sizes == [200, 200, 50]
        assert inserted == 450

    def test_length_mismatch_rejected_before_writing(self):
        """chunks and vectors must pair up one to one."""
        store = make_store()
        with pytest.raises(QueryError):
            VectorUpsertPipeline(store).upsert(make_chunks(3), make_vectors(2), META)
        store.write_batch.assert_not_called()

    def test_empty_input(self):
        """Nothing to write returns zero."""
        store = make_store()
        assert VectorUpsertPipeline(store).upsert([], [], META) == 0
        store.write_batch.assert_not_called()

    def test_failure_reports_committed_count(self):
        """A failing batch reports what earlier batches already wrote."""
        calls = []

        def fail_second(records):
            calls.append(len(records))
            if len(calls) == 2:
                raise ConnectionError("store went away")
            return [r.chunk_id for r in records]

        store = make_store(fail_second)

        with pytest.raises(VectorStoreError) as exc_info:
            VectorUpsertPipeline(store, batch_size=200).upsert(make_chunks(450), make_vectors(450), META)

        assert exc_info.value.inserted_so_far == 200
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert len(calls) == 2

    def test_partial_confirmation_logged(self, caplog):
        """Confirmed totals below the record count are returned and warned about."""
        store = make_store(lambda records: {"count": len(records) - 1})

        with caplog.at_level(logging.WARNING, logger="citerag.vector_db.writer"):
            inserted = VectorUpsertPipeline(store, batch_size=2).upsert(
                make_chunks(4), make_vectors(4), META
            )

        assert inserted == 2
        assert "confirmed 2 of 4" in caplog.text

    def test_concurrent_batches_write_everything(self):
        """Parallel batches land every record in the store."""
        store = InMemoryVectorStore(collection="TestChunks")
        store.ensure_index(3)

        inserted = VectorUpsertPipeline(store, batch_size=7, max_workers=4).upsert(
            make_chunks(50), make_vectors(50), META
        )

        assert inserted == 50
        assert len(store) == 50

    def test_concurrent_failure_counts_successful_batches(self):
        """With workers, inserted_so_far sums the batches that succeeded."""

        def fail_on_zero(records):
            if records[0].position == 0:
                raise RuntimeError("boom")
            return [r.chunk_id for r in records]

        store = make_store(fail_on_zero)
        with pytest.raises(VectorStoreError) as exc_info:
            VectorUpsertPipeline(store, batch_size=5, max_workers=3).upsert(
                make_chunks(15), make_vectors(15), META
            )
        assert exc_info.value.inserted_so_far == 10

    @pytest.mark.parametrize("kwargs", [{"batch_size": 0}, {"max_workers": 0}])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(ValueError):
            VectorUpsertPipeline(make_store(), **kwargs)
