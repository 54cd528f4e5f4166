"""Input validation utilities."""

from typing import List, Optional

from ..models.document import DocumentEntry
from ..core.exceptions import ValidationError

DEFAULT_LIMIT = 10
MAX_LIMIT = 50


def validate_document(document: DocumentEntry, components_module: str) -> None:
    """
    Validate one document entry.

    Args:
        document: Entry to validate
        components_module: Name of the only module whose entries may carry a category

    Raises:
        ValidationError: If the entry is invalid
    """
    if not isinstance(document, DocumentEntry):
        raise ValidationError("Invalid document type")

    if not document.title or not document.title.strip():
        raise ValidationError(f"Document title is required: {document.id}")

    if document.category is not None and document.module != components_module:
        raise ValidationError(
            f"Document {document.id} has category '{document.category}' "
            f"outside the '{components_module}' module"
        )


def validate_documents_batch(documents: List[DocumentEntry], components_module: str) -> None:
    """
    Validate a generation's worth of documents.

    Raises:
        ValidationError: If any entry is invalid or two entries share an ID
    """
    doc_ids = set()
    for doc in documents:
        validate_document(doc, components_module)

        if doc.id in doc_ids:
            raise ValidationError(f"Duplicate document ID found: {doc.id}")
        doc_ids.add(doc.id)


def validate_query(query: str) -> str:
    """
    Validate and normalize search query text.

    Raises:
        ValidationError: If the query is empty
    """
    if query is None or not str(query).strip():
        raise ValidationError("Query text is required")
    return str(query).strip()


def normalize_limit(limit: Optional[int]) -> int:
    """Apply the default and clamp a result limit to 1..MAX_LIMIT."""
    if limit is None:
        return DEFAULT_LIMIT
    return max(1, min(int(limit), MAX_LIMIT))
