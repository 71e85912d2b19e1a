from __future__ import annotations

from typing import Any, Mapping, Union

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ..core.domain.document import Document
from ..core.domain.errors import SerializationError
from ..core.ports.serializer_port import DocumentSerializerPort


class DocumentSerializer(DocumentSerializerPort):
    """JSON codec for Document using camelCase field names."""

    def to_json(self, document: Union[Document, Mapping[str, Any]]) -> str:
        try:
            if not isinstance(document, Document):
                document = Document.model_validate(document)
            return document.model_dump_json(by_alias=True)
        except (ValidationError, PydanticSerializationError) as e:
            raise SerializationError(f"Cannot encode document: {e}") from e

    def from_json(self, text: Union[str, bytes]) -> Document:
        try:
            return Document.model_validate_json(text)
        except ValidationError as e:
            raise SerializationError(f"Cannot decode document: {e}") from e
