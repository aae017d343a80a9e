"""Supabase-backed document store."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from supabase import Client

from nutrition_coach.services.store import (
    ChangeCallback,
    ChangeListeners,
    Document,
    DocumentKey,
    DocumentStore,
)

_CONFLICT_COLUMNS = "user_id,collection,document_id"


@dataclass
class SupabaseDocumentStore(DocumentStore):
    """Stores every document as a JSON row in a single table.

    Change callbacks fire for writes made through this instance.
    """

    client: Client
    table: str = "user_documents"
    _listeners: ChangeListeners = field(default_factory=ChangeListeners)

    def latest_value(self, key: DocumentKey) -> Document | None:
        """Return the document data, if the row exists."""
        response = (
            self.client.table(self.table)
            .select("data")
            .eq("user_id", str(key.user_id))
            .eq("collection", key.collection)
            .eq("document_id", str(key.document_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("data") or {}

    def list_documents(self, user_id: UUID, collection: str) -> dict[str, Document]:
        """Return every document of a collection."""
        response = (
            self.client.table(self.table)
            .select("document_id, data")
            .eq("user_id", str(user_id))
            .eq("collection", collection)
            .execute()
        )
        return {
            str(row["document_id"]): row.get("data") or {}
            for row in response.data or []
        }

    def on_change(
        self, key: DocumentKey, callback: ChangeCallback
    ) -> Callable[[], None]:
        """Register a callback for writes through this store."""
        return self._listeners.add(key, callback)

    def merge_write(self, key: DocumentKey, partial: Document) -> None:
        """Merge fields into the stored document."""
        current = self.latest_value(key) or {}
        self._upsert(key, {**current, **partial})

    def replace_write(self, key: DocumentKey, full: Document) -> None:
        """Overwrite the stored document."""
        self._upsert(key, full)

    def add_document(self, user_id: UUID, collection: str, data: Document) -> str:
        """Insert a document under a fresh id."""
        document_id = str(uuid4())
        self._upsert(DocumentKey(user_id, collection, document_id), data)
        return document_id

    def delete(self, key: DocumentKey) -> None:
        """Delete a document row."""
        self.client.table(self.table).delete().eq("user_id", str(key.user_id)).eq(
            "collection", key.collection
        ).eq("document_id", str(key.document_id)).execute()
        self._listeners.notify(key)

    def _upsert(self, key: DocumentKey, data: Document) -> None:
        if key.document_id is None:
            raise ValueError("Cannot write to a collection key")
        self.client.table(self.table).upsert(
            {
                "user_id": str(key.user_id),
                "collection": key.collection,
                "document_id": key.document_id,
                "data": data,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict=_CONFLICT_COLUMNS,
        ).execute()
        self._listeners.notify(key)
