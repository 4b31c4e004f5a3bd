"""
Document store: the single source of truth for the current CV.

Writers (chat session, form editor, photo upload) publish complete replacement
Documents; readers (renderer, score calculator) read `current` or subscribe to
be told about each replacement. Replacement swaps one reference, so a reader
always sees a whole snapshot.
"""

from typing import Callable, List

from lumina.contexts.document.logger import _log_warning, log_document_replaced
from lumina.contexts.document.model import Document, changed_fields

Subscriber = Callable[[Document, Document], None]


class DocumentStore:
    """
    Holds the current Document and notifies subscribers on replacement.

    Example:
        store = DocumentStore(Document())
        unsubscribe = store.subscribe(lambda old, new: print(new.theme.primary_color))
        store.replace(new_document, source="form")
        unsubscribe()
    """

    def __init__(self, initial: Document = None):
        if initial is None:
            initial = Document()
        if not isinstance(initial, Document):
            raise TypeError(f"DocumentStore needs a Document, got {type(initial).__name__}")
        self._current = initial
        self._subscribers: List[Subscriber] = []

    @property
    def current(self) -> Document:
        return self._current

    def replace(self, document: Document, source: str = "unknown") -> Document:
        """
        Publish a full replacement Document.

        Subscribers are called in subscription order with (previous, new), even
        when the new Document equals the previous one.

        Args:
            document: Complete new Document
            source: Writer name for logging ("chat", "form", "photo", ...)

        Returns:
            The previous Document
        """
        if not isinstance(document, Document):
            _log_warning(f"Rejected replacement from {source}: {type(document).__name__} is not a Document")
            raise TypeError(f"Only complete Documents can be published, got {type(document).__name__}")

        previous = self._current
        self._current = document

        log_document_replaced(source, changed_fields(previous, document), len(self._subscribers))

        for callback in list(self._subscribers):
            callback(previous, document)

        return previous

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register callback; returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
