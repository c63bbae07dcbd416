"""Analysis records: at most one per (owner, document)."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobseeker.db.tables import ResumeAnalysis

logger = logging.getLogger(__name__)


class AnalysisRepository:
    """Persistence for ResumeAnalysis rows."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: str, document_id: str) -> ResumeAnalysis | None:
        statement = select(ResumeAnalysis).where(
            ResumeAnalysis.user_id == user_id,
            ResumeAnalysis.document_id == document_id,
        )
        return self.session.scalars(statement).first()

    def get_for_document(self, document_id: str) -> ResumeAnalysis | None:
        statement = select(ResumeAnalysis).where(ResumeAnalysis.document_id == document_id)
        return self.session.scalars(statement).first()

    def create(
        self,
        user_id: str,
        document_id: str,
        skills: list[dict],
        summary: str,
        job_keywords: list[str],
    ) -> ResumeAnalysis:
        """
        Insert a record in one commit.

        The unique (user_id, document_id) constraint decides concurrent inserts:
        the first write wins and later writers get the stored record back.
        """
        record = ResumeAnalysis(
            user_id=user_id,
            document_id=document_id,
            skills=skills,
            summary=summary,
            job_keywords=job_keywords,
        )
        self.session.add(record)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            existing = self.get(user_id, document_id)
            if existing is None:
                raise
            logger.info("Analysis for document %s already stored by a concurrent request", document_id)
            return existing
        self.session.refresh(record)
        return record

    def delete_for_document(self, document_id: str) -> int:
        """Delete inside the current transaction; the caller commits."""
        result = self.session.execute(delete(ResumeAnalysis).where(ResumeAnalysis.document_id == document_id))
        return result.rowcount or 0
