"""Document store abstractions.

Every persisted entity lives in a per-user collection of JSON documents.
Writes are last-write-wins: there is no compare-and-swap, so concurrent
writers to the same document can overwrite each other.
"""

import copy
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID, uuid4

PROFILE = "profile"
DIET_PLANS = "dietPlans"
DAILY_LOGS = "dailyLogs"
STREAK = "streak"

SINGLETON_ID = "current"

Document = dict[str, object]


@dataclass(frozen=True)
class DocumentKey:
    """Address of a document, or of a whole collection when document_id is None."""

    user_id: UUID
    collection: str
    document_id: str | None = None

    def collection_key(self) -> "DocumentKey":
        """Return the key of the enclosing collection."""
        return DocumentKey(self.user_id, self.collection)


def profile_key(user_id: UUID) -> DocumentKey:
    return DocumentKey(user_id, PROFILE, SINGLETON_ID)


def streak_key(user_id: UUID) -> DocumentKey:
    return DocumentKey(user_id, STREAK, SINGLETON_ID)


def daily_log_key(user_id: UUID, day_id: str) -> DocumentKey:
    return DocumentKey(user_id, DAILY_LOGS, day_id)


def diet_plan_key(user_id: UUID, plan_id: str) -> DocumentKey:
    return DocumentKey(user_id, DIET_PLANS, plan_id)


ChangeCallback = Callable[[DocumentKey], None]


class DocumentStore(Protocol):
    """Key-value store of JSON documents per user."""

    def latest_value(self, key: DocumentKey) -> Document | None:
        """Return the latest snapshot of a document, if present."""

    def list_documents(self, user_id: UUID, collection: str) -> dict[str, Document]:
        """Return all documents of a collection keyed by document id."""

    def on_change(
        self, key: DocumentKey, callback: ChangeCallback
    ) -> Callable[[], None]:
        """Register a change callback and return a function that removes it."""

    def merge_write(self, key: DocumentKey, partial: Document) -> None:
        """Merge top-level fields into a document, creating it if needed."""

    def replace_write(self, key: DocumentKey, full: Document) -> None:
        """Replace a document entirely."""

    def add_document(self, user_id: UUID, collection: str, data: Document) -> str:
        """Append a document with a generated id and return the id."""

    def delete(self, key: DocumentKey) -> None:
        """Delete a document."""


@dataclass
class ChangeListeners:
    """Registry of change callbacks for documents and collections."""

    _callbacks: dict[DocumentKey, list[ChangeCallback]] = field(default_factory=dict)

    def add(self, key: DocumentKey, callback: ChangeCallback) -> Callable[[], None]:
        """Register a callback for a document or collection key."""
        self._callbacks.setdefault(key, []).append(callback)

        def remove() -> None:
            callbacks = self._callbacks.get(key, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return remove

    def notify(self, key: DocumentKey) -> None:
        """Invoke callbacks registered for the document and its collection."""
        targets = [key]
        if key.document_id is not None:
            targets.append(key.collection_key())
        for target in targets:
            for callback in list(self._callbacks.get(target, [])):
                callback(key)


@dataclass
class InMemoryDocumentStore(DocumentStore):
    """Process-local document store with synchronous change delivery."""

    _documents: dict[DocumentKey, Document] = field(default_factory=dict)
    _listeners: ChangeListeners = field(default_factory=ChangeListeners)

    def latest_value(self, key: DocumentKey) -> Document | None:
        document = self._documents.get(key)
        return copy.deepcopy(document) if document is not None else None

    def list_documents(self, user_id: UUID, collection: str) -> dict[str, Document]:
        return {
            str(key.document_id): copy.deepcopy(document)
            for key, document in self._documents.items()
            if key.user_id == user_id and key.collection == collection
        }

    def on_change(
        self, key: DocumentKey, callback: ChangeCallback
    ) -> Callable[[], None]:
        return self._listeners.add(key, callback)

    def merge_write(self, key: DocumentKey, partial: Document) -> None:
        current = self._documents.get(key, {})
        self._documents[key] = {**current, **copy.deepcopy(partial)}
        self._listeners.notify(key)

    def replace_write(self, key: DocumentKey, full: Document) -> None:
        self._documents[key] = copy.deepcopy(full)
        self._listeners.notify(key)

    def add_document(self, user_id: UUID, collection: str, data: Document) -> str:
        document_id = str(uuid4())
        self.replace_write(DocumentKey(user_id, collection, document_id), data)
        return document_id

    def delete(self, key: DocumentKey) -> None:
        if self._documents.pop(key, None) is not None:
            self._listeners.notify(key)
