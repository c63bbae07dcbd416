"""
Binary storage for uploaded documents.

Payloads are split into fixed-size chunks stored next to a metadata row, in the
same transaction, and streamed back chunk by chunk on read.
"""

import logging
import uuid
from collections.abc import Iterator
from typing import BinaryIO

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from jobseeker.db.tables import DocumentChunk, StoredDocument
from jobseeker.errors import FileTooLarge, NotFound, UnsupportedFileType

logger = logging.getLogger(__name__)

MIME_PDF = "application/pdf"
MIME_DOC = "application/msword"
MIME_DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
MIME_TEXT = "text/plain"

ALLOWED_MIME_TYPES = (MIME_PDF, MIME_DOC, MIME_DOCX, MIME_TEXT)

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5 MB, inclusive
DEFAULT_CHUNK_SIZE = 255 * 1024


def validate_upload(size: int, mime_type: str | None, max_size: int = MAX_FILE_SIZE) -> None:
    """Raise FileTooLarge or UnsupportedFileType; no side effects."""
    if size > max_size:
        raise FileTooLarge(size, max_size)
    if mime_type not in ALLOWED_MIME_TYPES:
        raise UnsupportedFileType(mime_type)


def _parse_id(document_id: str) -> str | None:
    """Normalize a document id, or None if it is not a valid identifier."""
    try:
        return str(uuid.UUID(str(document_id)))
    except ValueError:
        return None


class DocumentStore:
    """Stores document payloads and metadata."""

    def __init__(
        self,
        session: Session,
        max_size: int = MAX_FILE_SIZE,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.session = session
        self.max_size = max_size
        self.chunk_size = chunk_size

    def validate(self, size: int, mime_type: str | None) -> None:
        validate_upload(size, mime_type, self.max_size)

    def read_limited(self, stream: BinaryIO, declared_size: int | None = None) -> bytes:
        """
        Read an upload stream without buffering more than max_size + 1 bytes.

        A declared size over the limit is rejected before anything is read.
        """
        if declared_size is not None and declared_size > self.max_size:
            raise FileTooLarge(declared_size, self.max_size)

        content = stream.read(self.max_size + 1)
        if len(content) > self.max_size:
            raise FileTooLarge(declared_size or len(content), self.max_size)
        return content

    def store(self, content: bytes, filename: str, owner_id: str, mime_type: str) -> str:
        """Persist payload and metadata together. Returns the new document id."""
        self.validate(len(content), mime_type)

        document = StoredDocument(
            id=str(uuid.uuid4()),
            filename=filename,
            mime_type=mime_type,
            size=len(content),
            owner_id=owner_id,
            chunk_size=self.chunk_size,
        )
        try:
            self.session.add(document)
            self.session.flush()
            for n, offset in enumerate(range(0, len(content), self.chunk_size)):
                self.session.add(
                    DocumentChunk(
                        document_id=document.id,
                        n=n,
                        data=content[offset : offset + self.chunk_size],
                    )
                )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info("Stored document %s (%d bytes, %s) for %s", document.id, document.size, mime_type, owner_id)
        return document.id

    def fetch_metadata(self, document_id: str) -> StoredDocument | None:
        """Metadata for a document; None for unknown and malformed ids alike."""
        key = _parse_id(document_id)
        if key is None:
            return None
        return self.session.get(StoredDocument, key)

    def iter_bytes(self, document_id: str) -> Iterator[bytes]:
        """Stream the payload chunk by chunk."""
        document = self.fetch_metadata(document_id)
        if document is None:
            raise NotFound("Document not found")

        statement = (
            select(DocumentChunk.data)
            .where(DocumentChunk.document_id == document.id)
            .order_by(DocumentChunk.n)
            .execution_options(yield_per=16)
        )
        for data in self.session.scalars(statement):
            yield data

    def fetch_bytes(self, document_id: str) -> bytes:
        return b"".join(self.iter_bytes(document_id))

    def exists(self, document_id: str) -> bool:
        return self.fetch_metadata(document_id) is not None

    def delete(self, document_id: str) -> None:
        """Remove payload and metadata. Unknown ids are a no-op."""
        key = _parse_id(document_id)
        if key is None:
            return
        try:
            self.session.execute(delete(DocumentChunk).where(DocumentChunk.document_id == key))
            self.session.execute(delete(StoredDocument).where(StoredDocument.id == key))
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
