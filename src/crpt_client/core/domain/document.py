from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """JSON field names are camelCase; Python attributes stay snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class Description(_CamelModel):
    participant_inn: str


class Product(_CamelModel):
    certificate_document: Optional[str] = None
    certificate_document_date: Optional[str] = None
    certificate_document_number: Optional[str] = None
    tnved_code: Optional[str] = None
    uit_code: Optional[str] = None
    uitu_code: Optional[str] = None


class Document(_CamelModel):
    """Document accepted by the ``documents/create`` endpoint."""

    description: Description
    doc_id: str
    doc_status: str
    doc_type: str
    import_request: bool
    owner_inn: str
    producer_inn: str
    production_date: str
    production_type: str
    products: list[Product] = Field(min_length=1)
    reg_date: str
    reg_number: str
