from __future__ import annotations

from typing import Any, Mapping, Protocol, Union

from ..domain.document import Document


class DocumentSerializerPort(Protocol):
    def to_json(self, document: Union[Document, Mapping[str, Any]]) -> str:
        """Encode a document as JSON text, raising SerializationError on failure."""
        ...

    def from_json(self, text: Union[str, bytes]) -> Document:
        """Decode JSON text into a Document, raising SerializationError on failure."""
        ...
