"""
Resume pipeline: upload, fetch, analyze, delete.

The only place ownership and existence checks happen. Analysis is memoized per
(owner, document): once a record exists it is returned as stored, without
extraction or a model call. A failed analysis leaves no record, so calling
again is always safe.
"""

import logging
from collections.abc import Callable

from jobseeker.agents.resume_analyzer import ResumeAnalyzer
from jobseeker.db.tables import ResumeAnalysis, StoredDocument
from jobseeker.errors import Forbidden, NotFound
from jobseeker.repositories.analysis_repository import AnalysisRepository
from jobseeker.repositories.document_store import DocumentStore
from jobseeker.repositories.user_repository import UserRepository
from jobseeker.tools.text_extractor import extract_text

logger = logging.getLogger(__name__)


class ResumeService:
    """Use-case layer over the document store, extractor, analyzer and records."""

    def __init__(
        self,
        store: DocumentStore,
        analyses: AnalysisRepository,
        analyzer: ResumeAnalyzer,
        users: UserRepository | None = None,
        extractor: Callable[[bytes, str], str] = extract_text,
    ):
        self.store = store
        self.analyses = analyses
        self.analyzer = analyzer
        self.users = users
        self.extractor = extractor

    def upload(self, content: bytes, filename: str, mime_type: str, owner_id: str) -> StoredDocument:
        document_id = self.store.store(content, filename, owner_id, mime_type)
        document = self.store.fetch_metadata(document_id)
        if self.users is not None:
            self.users.set_resume(owner_id, document_id, filename, document.uploaded_at)
        return document

    def get_owned_document(self, document_id: str, caller_id: str) -> StoredDocument:
        document = self.store.fetch_metadata(document_id)
        if document is None:
            raise NotFound("Resume not found")
        if document.owner_id != caller_id:
            raise Forbidden("Access denied")
        return document

    def get_document(self, document_id: str, caller_id: str) -> tuple[StoredDocument, ResumeAnalysis | None]:
        document = self.get_owned_document(document_id, caller_id)
        return document, self.analyses.get(caller_id, document.id)

    def get_or_create_analysis(self, document_id: str, caller_id: str) -> ResumeAnalysis:
        document = self.get_owned_document(document_id, caller_id)

        existing = self.analyses.get(caller_id, document.id)
        if existing is not None:
            logger.info("Analysis cache hit for document %s", document.id)
            return existing

        logger.info("Analyzing document %s (%s)", document.id, document.mime_type)
        content = self.store.fetch_bytes(document.id)
        text = self.extractor(content, document.mime_type)
        result = self.analyzer.analyze(text)

        return self.analyses.create(
            user_id=caller_id,
            document_id=document.id,
            skills=result.skill_categories(),
            summary=result.summary,
            job_keywords=result.job_keywords,
        )

    def delete_document(self, document_id: str, caller_id: str) -> None:
        """
        Remove the analysis, the user's pointer and the document in one transaction.

        The record and pointer changes stay pending in the shared session until
        the store commits its delete; a failure there rolls all of them back.
        """
        document = self.get_owned_document(document_id, caller_id)
        self.analyses.delete_for_document(document.id)
        if self.users is not None:
            self.users.clear_resume(caller_id, document.id)
        self.store.delete(document.id)
        logger.info("Deleted document %s", document.id)
