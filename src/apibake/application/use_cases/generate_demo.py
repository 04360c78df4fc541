"""Use Case: Generate Demo Document.

Renders a small pet store API reference that exercises every block the
document engine knows: title page, sections, nested headers, method
banners, data fields, object schemas, enum values and examples.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Optional

from apibake.domain.errors import ApiBakeError, DocumentGenerationError
from apibake.domain.models.fields import DataField, FieldType
from apibake.engine.document import ApiDocument

logger = logging.getLogger(__name__)

_PET_FIELDS = [
    DataField(name="id", type=FieldType(text="integer"), description="Unique identifier"),
    DataField(name="name", type=FieldType(text="string")),
    DataField(
        name="status",
        type=FieldType(text="PetStatus", anchor="schema-PetStatus"),
        description="Availability of the pet in the store",
    ),
    DataField(name="tags", required=False, type=FieldType(text="string[]")),
]

_ORDER_FIELDS = [
    DataField(name="id", type=FieldType(text="integer")),
    DataField(name="petId", type=FieldType(text="integer"), description="Ordered pet"),
    DataField(name="quantity", type=FieldType(text="integer")),
    DataField(name="shipDate", required=False, type=FieldType(text="string(date-time)")),
]


class GenerateDemoUseCase:
    """Build a sample API reference with realistic content."""

    def __init__(self, document_factory: Callable[[Path], ApiDocument]) -> None:
        self._document_factory = document_factory

    def execute(
        self,
        output_path: Path,
        title: str = "Pet Store API",
        subtitle: Optional[str] = "Reference documentation",
    ) -> Path:
        """Render the demo document to *output_path*.

        Raises:
            ApiBakeError: configuration, nesting or output errors, unchanged.
            DocumentGenerationError: any other rendering failure.
        """
        try:
            with self._document_factory(Path(output_path)) as doc:
                doc.add_title_page(title, subtitle, date.today().isoformat())
                self._pets_section(doc)
                self._store_section(doc)
                doc.finish()
        except ApiBakeError:
            raise
        except Exception as exc:
            raise DocumentGenerationError(f"Failed to generate demo: {exc}") from exc

        logger.info("Demo document rendered with %d page(s)", doc.pages.total)
        return Path(output_path)

    def _pets_section(self, doc: ApiDocument) -> None:
        doc.new_section("Pets")
        doc.header(0, "Pets API")
        doc.para("Everything about the pets available in the store.")

        doc.header(1, "Endpoints")
        doc.api_header("GET", "/pets", 2)
        doc.description("Returns all pets, optionally filtered by status.")
        doc.sub_header("Query parameters")
        doc.data_fields(
            [
                DataField(
                    name="status",
                    required=False,
                    type=FieldType(text="PetStatus", anchor="schema-PetStatus"),
                    description="Only return pets with this status",
                ),
                DataField(name="limit", required=False, type=FieldType(text="integer")),
            ]
        )
        doc.line_break()
        doc.sub_header("Response 200")
        doc.schema_type("Pet[]", "application/json")
        doc.example(
            "two pets",
            json.dumps([{"id": 1, "name": "Rex"}, {"id": 2, "name": "Tom"}], indent=2),
        )
        doc.line_break()

        doc.api_header("POST", "/pets", 2)
        doc.description("Adds a new pet to the store.")
        doc.sub_header("Request body")
        doc.schema_type("Pet", "application/json")
        doc.object_schema(_PET_FIELDS)
        doc.line_break()

        doc.api_header("DELETE", "/pets/{petId}", 2)
        doc.description("Removes a pet from the store.")

        doc.header(1, "Schemas")
        doc.header(2, "Pet", anchor="schema-Pet")
        doc.object_schema(_PET_FIELDS)
        doc.line_break()
        doc.header(2, "PetStatus", anchor="schema-PetStatus")
        doc.schema_type("string")
        doc.enum_values(["available", "pending", "sold"])

    def _store_section(self, doc: ApiDocument) -> None:
        doc.new_section("Store")
        doc.header(0, "Store API")
        doc.header(1, "Endpoints")
        doc.api_header("PUT", "/store/order/{orderId}", 2)
        doc.description("Replaces an existing order.")
        doc.indent_start()
        doc.object_schema(_ORDER_FIELDS)
        doc.indent_end()
        doc.line_break()
        doc.api_header("PATCH", "/store/order/{orderId}", 2)
        doc.description("Updates some fields of an order.")
        doc.api_header("OPTIONS", "/store", 2)
        doc.description("Lists the methods supported by the store endpoints.")
