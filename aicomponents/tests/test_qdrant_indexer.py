"""Unit tests for QdrantIndexer: batching, lazy collection creation, error paths."""
from __future__ import annotations

import math
import unittest
from uuid import UUID

from aicomponents.callbacks import CallbackHandler
from aicomponents.components.indexer import IndexerCallbackInput, IndexerCallbackOutput, QdrantIndexer, QdrantIndexerConfig
from aicomponents.config import QdrantConfig
from aicomponents.core.exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    EmbeddingError,
    UpsertError,
)
from aicomponents.infra.vectorstore import PayloadField
from aicomponents.schema import Document

from aicomponents.tests.fakes import FakeEmbedding, FakeQdrant, _run


def _indexer(client=None, embedding=None, *, batch_size=10, dims=4, collection="test_collection") -> QdrantIndexer:
    return QdrantIndexer(
        QdrantIndexerConfig(
            client=client if client is not None else FakeQdrant(),
            embedding=embedding if embedding is not None else FakeEmbedding(dims),
            vector_dim=dims,
            collection=collection,
            batch_size=batch_size,
        )
    )


def _docs(n: int) -> list:
    return [Document(id=f"doc-{i}", content="x" * (i + 1)) for i in range(n)]


class TestQdrantIndexerConstruction(unittest.TestCase):
    def test_missing_client_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            QdrantIndexer(QdrantIndexerConfig(client=None, embedding=FakeEmbedding(), vector_dim=4))

    def test_missing_embedding_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            QdrantIndexer(QdrantIndexerConfig(client=FakeQdrant(), embedding=None, vector_dim=4))

    def test_non_positive_dimension_rejected(self) -> None:
        for dim in (0, -3, True, 4.0, None):
            with self.assertRaises(ConfigurationError):
                QdrantIndexer(QdrantIndexerConfig(client=FakeQdrant(), embedding=FakeEmbedding(), vector_dim=dim))

    def test_unknown_distance_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            QdrantIndexer(QdrantIndexerConfig(client=FakeQdrant(), embedding=FakeEmbedding(), vector_dim=4, distance="hamming"))

    def test_missing_distance_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            QdrantIndexer(QdrantIndexerConfig(client=FakeQdrant(), embedding=FakeEmbedding(), vector_dim=4, distance=None))

    def test_defaults_applied(self) -> None:
        idx = QdrantIndexer(QdrantIndexerConfig(client=FakeQdrant(), embedding=FakeEmbedding(), vector_dim=4, collection="", batch_size=0))
        self.assertEqual(idx.collection, "knowledge_base")
        self.assertEqual(idx.batch_size, 10)
        self.assertEqual(idx.get_type(), "Qdrant")
        self.assertTrue(idx.is_callbacks_enabled())

    def test_construction_does_no_io(self) -> None:
        client = FakeQdrant()
        _indexer(client)
        self.assertEqual(client.calls, [])

    def test_from_qdrant_config(self) -> None:
        cfg = QdrantConfig(url="http://localhost:6333", vector_size=8, collection_name="kb2", distance="Dot", batch_size=3)
        idx_cfg = QdrantIndexerConfig.from_qdrant_config(cfg, client=FakeQdrant(), embedding=FakeEmbedding(8))
        self.assertEqual(idx_cfg.vector_dim, 8)
        self.assertEqual(idx_cfg.collection, "kb2")
        self.assertEqual(idx_cfg.distance, "Dot")
        self.assertEqual(idx_cfg.batch_size, 3)


class TestQdrantIndexerStore(unittest.TestCase):
    def test_two_docs_against_empty_collection(self) -> None:
        client = FakeQdrant(exists=False)
        idx = _indexer(client, batch_size=10)
        d1 = Document(id="d1", content="asd")
        d2 = Document(id="d2", content="qwe", metadata={"mock_field_1": {"extra_field_1": "asd"}, "mock_field_2": 123})

        ids = _run(idx.store([d1, d2]))

        self.assertEqual(ids, ["d1", "d2"])
        self.assertEqual(client.ops(), ["exists", "create", "upsert"])
        self.assertEqual(client.calls[1], ("create", "test_collection", 4, "Cosine"))

    def test_single_upsert_when_within_batch_size(self) -> None:
        client = FakeQdrant(exists=True)
        docs = _docs(5)
        ids = _run(_indexer(client, batch_size=5).store(docs))
        self.assertEqual(ids, [d.id for d in docs])
        self.assertEqual(client.ops().count("upsert"), 1)

    def test_multiple_batches_preserve_order(self) -> None:
        for n, batch in ((7, 3), (9, 3), (10, 4), (1, 1)):
            client = FakeQdrant(exists=True)
            embedding = FakeEmbedding()
            docs = _docs(n)
            ids = _run(_indexer(client, embedding, batch_size=batch).store(docs))
            self.assertEqual(ids, [d.id for d in docs])
            self.assertEqual(client.ops().count("upsert"), math.ceil(n / batch))
            self.assertEqual(len(embedding.calls), math.ceil(n / batch))
            self.assertTrue(all(len(c) <= batch for c in embedding.calls))
            stored = [p.payload[PayloadField.DOCUMENT_ID] for pts in client.upserts for p in pts]
            self.assertEqual(stored, ids)

    def test_existing_collection_never_created(self) -> None:
        client = FakeQdrant(exists=True)
        _run(_indexer(client, batch_size=2).store(_docs(5)))
        self.assertNotIn("create", client.ops())
        self.assertEqual(client.ops()[0], "exists")

    def test_collection_checked_once_per_indexer(self) -> None:
        client = FakeQdrant(exists=False)
        idx = _indexer(client, batch_size=2)
        _run(idx.store(_docs(3)))
        _run(idx.store(_docs(2)))
        self.assertEqual(client.ops().count("exists"), 1)
        self.assertEqual(client.ops().count("create"), 1)
        self.assertLess(client.ops().index("create"), client.ops().index("upsert"))

    def test_point_payload_and_vector(self) -> None:
        client = FakeQdrant(exists=True)
        doc = Document(id="7b83aca0-5f6c-4491-8dd4-22e15e9d582e", content="qwe", metadata={"k": 1})
        _run(_indexer(client).store([doc]))
        point = client.upserts[0][0]
        self.assertEqual(point.id, doc.id)
        self.assertEqual(point.vector, [3.0, 4.0, 5.0, 6.0])
        self.assertEqual(point.payload, {"content": "qwe", "metadata": {"k": 1}, "document_id": doc.id})

    def test_non_uuid_ids_map_to_stable_uuid(self) -> None:
        client = FakeQdrant(exists=True)
        idx = _indexer(client)
        _run(idx.store([Document(id="d1", content="a")]))
        _run(idx.store([Document(id="d1", content="b")]))
        first, second = client.upserts[0][0].id, client.upserts[1][0].id
        self.assertEqual(first, second)
        UUID(first)

    def test_distinct_ids_get_distinct_points(self) -> None:
        client = FakeQdrant(exists=True)
        ids = ["7", "007", "²", str(2**64)]
        stored = _run(_indexer(client).store([Document(id=i, content="a") for i in ids]))
        self.assertEqual(stored, ids)
        points = client.upserts[0]
        self.assertEqual(len({p.id for p in points}), len(ids))
        self.assertEqual([p.payload[PayloadField.DOCUMENT_ID] for p in points], ids)

    def test_empty_input_does_nothing(self) -> None:
        client = FakeQdrant()
        self.assertEqual(_run(_indexer(client).store([])), [])
        self.assertEqual(client.calls, [])

    def test_per_call_embedding_override(self) -> None:
        default, override = FakeEmbedding(), FakeEmbedding()
        _run(_indexer(FakeQdrant(exists=True), default).store(_docs(2), embedding=override))
        self.assertEqual(default.calls, [])
        self.assertEqual(len(override.calls), 1)


class TestQdrantIndexerFailures(unittest.TestCase):
    def test_provider_error_wrapped(self) -> None:
        client = FakeQdrant()
        boom = RuntimeError("provider down")
        with self.assertRaises(EmbeddingError) as ctx:
            _run(_indexer(client, FakeEmbedding(error=boom)).store(_docs(2)))
        self.assertIs(ctx.exception.cause, boom)
        self.assertNotIn("upsert", client.ops())

    def test_embedding_error_passes_through(self) -> None:
        err = EmbeddingError("quota")
        with self.assertRaises(EmbeddingError) as ctx:
            _run(_indexer(embedding=FakeEmbedding(error=err)).store(_docs(1)))
        self.assertIs(ctx.exception, err)

    def test_wrong_vector_count(self) -> None:
        with self.assertRaises(EmbeddingError):
            _run(_indexer(embedding=FakeEmbedding(drop_last=True)).store(_docs(3)))

    def test_dimension_mismatch(self) -> None:
        client = FakeQdrant(exists=True)
        with self.assertRaises(DimensionMismatchError) as ctx:
            _run(_indexer(client, FakeEmbedding(bad_dim_at=1), batch_size=2).store(_docs(4)))
        self.assertEqual(ctx.exception.expected, 4)
        self.assertEqual(ctx.exception.got, 3)
        self.assertEqual(client.upserts, [])

    def test_failing_batch_aborts_remaining(self) -> None:
        client = FakeQdrant(exists=True, upsert_error=UpsertError("disk full"), fail_on_upsert=2)
        with self.assertRaises(UpsertError):
            _run(_indexer(client, batch_size=2).store(_docs(6)))
        self.assertEqual(client.ops().count("upsert"), 2)


class _Recorder(CallbackHandler):
    def __init__(self) -> None:
        self.events = []

    async def on_start(self, info, payload):
        self.events.append(("start", info, payload))

    async def on_end(self, info, payload):
        self.events.append(("end", info, payload))

    async def on_error(self, info, error):
        self.events.append(("error", info, error))


class _Broken(CallbackHandler):
    async def on_start(self, info, payload):
        raise ValueError("handler bug")


class TestQdrantIndexerCallbacks(unittest.TestCase):
    def test_start_and_end(self) -> None:
        rec = _Recorder()
        docs = _docs(2)
        _run(_indexer(FakeQdrant(exists=True)).store(docs, callbacks=[rec]))
        self.assertEqual([e[0] for e in rec.events], ["start", "end"])
        start_info, start_payload = rec.events[0][1], rec.events[0][2]
        self.assertEqual(start_info.type, "Qdrant")
        self.assertEqual(start_info.component, "Indexer")
        self.assertIsInstance(start_payload, IndexerCallbackInput)
        self.assertEqual(start_payload.docs, docs)
        self.assertIsInstance(rec.events[1][2], IndexerCallbackOutput)
        self.assertEqual(rec.events[1][2].ids, ["doc-0", "doc-1"])

    def test_error_reported(self) -> None:
        rec = _Recorder()
        with self.assertRaises(EmbeddingError):
            _run(_indexer(embedding=FakeEmbedding(error=RuntimeError("x"))).store(_docs(1), callbacks=[rec]))
        self.assertEqual([e[0] for e in rec.events], ["start", "error"])
        self.assertIsInstance(rec.events[1][2], EmbeddingError)

    def test_handler_failure_does_not_break_store(self) -> None:
        with self.assertLogs("aicomponents.callbacks.handler", level="ERROR"):
            ids = _run(_indexer(FakeQdrant(exists=True)).store(_docs(1), callbacks=[_Broken()]))
        self.assertEqual(ids, ["doc-0"])


if __name__ == "__main__":
    unittest.main()
