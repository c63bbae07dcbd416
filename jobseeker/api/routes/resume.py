"""Resume upload, retrieval, analysis and deletion endpoints."""

from fastapi import APIRouter, Depends, File, UploadFile

from jobseeker.api.deps import get_current_user, get_resume_service
from jobseeker.api.limiter import analyze_limit
from jobseeker.api.schemas import (
    AnalysisData,
    Envelope,
    MessageResponse,
    ResumeDetailData,
    ResumeUploadData,
)
from jobseeker.db.tables import ResumeAnalysis
from jobseeker.errors import NoFile
from jobseeker.services import ResumeService
from jobseeker.utils.security import TokenPayload

router = APIRouter()


def _analysis_data(record: ResumeAnalysis) -> AnalysisData:
    return AnalysisData(skills=record.skills, summary=record.summary, job_keywords=record.job_keywords)


@router.post("/upload", status_code=201, response_model=Envelope[ResumeUploadData])
def upload_resume(
    file: UploadFile | None = File(None),
    user: TokenPayload = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    """Upload a resume (PDF, DOC, DOCX or TXT, up to 5MB)."""
    if file is None or not file.filename:
        raise NoFile("No file uploaded")

    content = service.store.read_limited(file.file, file.size)
    document = service.upload(content, file.filename, file.content_type, user.user_id)

    return Envelope(
        data=ResumeUploadData(
            document_id=document.id,
            file_name=document.filename,
            upload_date=document.uploaded_at,
        )
    )


@router.get("/{document_id}", response_model=Envelope[ResumeDetailData])
def get_resume(
    document_id: str,
    user: TokenPayload = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    """Get resume metadata and its analysis, if any."""
    document, analysis = service.get_document(document_id, user.user_id)

    return Envelope(
        data=ResumeDetailData(
            document_id=document.id,
            file_name=document.filename,
            mime_type=document.mime_type,
            size=document.size,
            upload_date=document.uploaded_at,
            has_analysis=analysis is not None,
            analysis=_analysis_data(analysis) if analysis else None,
        )
    )


@router.post(
    "/analyze/{document_id}",
    response_model=Envelope[AnalysisData],
    dependencies=[Depends(analyze_limit)],
)
def analyze_resume(
    document_id: str,
    user: TokenPayload = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    """Analyze a resume, or return the stored analysis."""
    record = service.get_or_create_analysis(document_id, user.user_id)
    return Envelope(data=_analysis_data(record))


@router.delete("/{document_id}", response_model=MessageResponse)
def delete_resume(
    document_id: str,
    user: TokenPayload = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    """Delete a resume and its analysis."""
    service.delete_document(document_id, user.user_id)
    return MessageResponse(message="Resume deleted successfully")
