"""
Document store abstraction over Firestore, SQL and an in-memory test implementation.

Documents are plain JSON-compatible dicts keyed by (collection, doc_id), the
same shape the web client stores in Firestore.
"""

from __future__ import annotations

import copy
import threading
import time
from typing import Any, Callable, Dict, Optional, Protocol

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from sqlalchemy import JSON, Column, Float, String, create_engine, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Document = Dict[str, Any]
Mutation = Callable[[Optional[Document]], Optional[Document]]


class DocumentStore(Protocol):
    """Interface for document access."""

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        ...

    def list(self, collection: str) -> list[tuple[str, Document]]:
        ...

    def query(
        self, collection: str, field: str, value: Any
    ) -> list[tuple[str, Document]]:
        ...

    def set(
        self, collection: str, doc_id: str, data: Document, merge: bool = False
    ) -> None:
        ...

    def delete(self, collection: str, doc_id: str) -> None:
        ...

    def update_with(
        self, collection: str, doc_id: str, mutate: Mutation
    ) -> Optional[Document]:
        """
        Atomically read a document, pass it (or None) to `mutate` and write the result.

        Returning None from `mutate` skips the write. Returns what was written.
        """
        ...


class InMemoryDocumentStore:
    """Simple in-memory document store for development and tests."""

    def __init__(self):
        self.collections: Dict[str, Dict[str, Document]] = {}
        self._lock = threading.RLock()

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            doc = self.collections.get(collection, {}).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def list(self, collection: str) -> list[tuple[str, Document]]:
        with self._lock:
            return [
                (doc_id, copy.deepcopy(doc))
                for doc_id, doc in self.collections.get(collection, {}).items()
            ]

    def query(
        self, collection: str, field: str, value: Any
    ) -> list[tuple[str, Document]]:
        return [
            (doc_id, doc)
            for doc_id, doc in self.list(collection)
            if doc.get(field) == value
        ]

    def set(
        self, collection: str, doc_id: str, data: Document, merge: bool = False
    ) -> None:
        with self._lock:
            docs = self.collections.setdefault(collection, {})
            if merge and doc_id in docs:
                docs[doc_id].update(copy.deepcopy(data))
            else:
                docs[doc_id] = copy.deepcopy(data)

    def delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            self.collections.get(collection, {}).pop(doc_id, None)

    def update_with(
        self, collection: str, doc_id: str, mutate: Mutation
    ) -> Optional[Document]:
        with self._lock:
            updated = mutate(self.get(collection, doc_id))
            if updated is not None:
                self.set(collection, doc_id, updated)
            return updated

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        with self._lock:
            self.collections.clear()


class FirestoreDocumentStore:
    """Firestore-backed store. Expects `firebase_admin.initialize_app()` to have run."""

    def __init__(self, client=None):
        self.client = client or firestore.client()

    def _ref(self, collection: str, doc_id: str):
        return self.client.collection(collection).document(doc_id)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        snapshot = self._ref(collection, doc_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    def list(self, collection: str) -> list[tuple[str, Document]]:
        return [
            (snapshot.id, snapshot.to_dict())
            for snapshot in self.client.collection(collection).stream()
        ]

    def query(
        self, collection: str, field: str, value: Any
    ) -> list[tuple[str, Document]]:
        stream = (
            self.client.collection(collection)
            .where(filter=FieldFilter(field, "==", value))
            .stream()
        )
        return [(snapshot.id, snapshot.to_dict()) for snapshot in stream]

    def set(
        self, collection: str, doc_id: str, data: Document, merge: bool = False
    ) -> None:
        self._ref(collection, doc_id).set(data, merge=merge)

    def delete(self, collection: str, doc_id: str) -> None:
        self._ref(collection, doc_id).delete()

    def update_with(
        self, collection: str, doc_id: str, mutate: Mutation
    ) -> Optional[Document]:
        transaction = self.client.transaction()
        doc_ref = self._ref(collection, doc_id)

        @firestore.transactional
        def _apply(transaction, doc_ref):
            snapshot = doc_ref.get(transaction=transaction)
            current = snapshot.to_dict() if snapshot.exists else None
            updated = mutate(current)
            if updated is not None:
                transaction.set(doc_ref, updated)
            return updated

        return _apply(transaction, doc_ref)


class SqlDocumentStore:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDocumentStore")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self.Session() as session:
            row = session.get(DocumentRow, (collection, doc_id))
            return copy.deepcopy(row.data) if row else None

    def list(self, collection: str) -> list[tuple[str, Document]]:
        with self.Session() as session:
            stmt = (
                select(DocumentRow)
                .where(DocumentRow.collection == collection)
                .order_by(DocumentRow.created_at.asc())
            )
            rows = session.execute(stmt).scalars().all()
            return [(row.doc_id, copy.deepcopy(row.data)) for row in rows]

    def query(
        self, collection: str, field: str, value: Any
    ) -> list[tuple[str, Document]]:
        # JSON path operators differ between SQLite and Postgres; filter in Python.
        return [
            (doc_id, doc)
            for doc_id, doc in self.list(collection)
            if doc.get(field) == value
        ]

    def set(
        self, collection: str, doc_id: str, data: Document, merge: bool = False
    ) -> None:
        now = time.time()
        with self.Session() as session:
            row = session.get(DocumentRow, (collection, doc_id))
            if row:
                merged = {**row.data, **data} if merge else data
                row.data = copy.deepcopy(merged)
                row.updated_at = now
            else:
                session.add(
                    DocumentRow(
                        collection=collection,
                        doc_id=doc_id,
                        data=copy.deepcopy(data),
                        created_at=now,
                        updated_at=now,
                    )
                )
            session.commit()

    def delete(self, collection: str, doc_id: str) -> None:
        with self.Session() as session:
            row = session.get(DocumentRow, (collection, doc_id))
            if row:
                session.delete(row)
                session.commit()

    def update_with(
        self, collection: str, doc_id: str, mutate: Mutation
    ) -> Optional[Document]:
        now = time.time()
        with self.Session() as session:
            row = session.get(
                DocumentRow, (collection, doc_id), with_for_update=True
            )
            current = copy.deepcopy(row.data) if row else None
            updated = mutate(current)
            if updated is None:
                session.rollback()
                return None
            if row:
                row.data = copy.deepcopy(updated)
                row.updated_at = now
            else:
                session.add(
                    DocumentRow(
                        collection=collection,
                        doc_id=doc_id,
                        data=copy.deepcopy(updated),
                        created_at=now,
                        updated_at=now,
                    )
                )
            session.commit()
            return updated


Base = declarative_base()


class DocumentRow(Base):
    __tablename__ = "documents"

    collection = Column(String, primary_key=True)
    doc_id = Column(String, primary_key=True)
    data = Column(JSON, nullable=False)
    created_at = Column(Float, nullable=False, index=True)
    updated_at = Column(Float, nullable=False)
