import logging

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status

from resume_fit.core.config import settings
from resume_fit.core.rate_limit import rate_limit
from resume_fit.extraction import (
    ALLOWED_UPLOAD_MIME_TYPES,
    ExtractionError,
    extract_text_async,
    normalize_mime_type,
    validate_upload_signature,
)
from resume_fit.schemas.analysis import (
    AnalyzeResumeResponse,
    ResumeAnalysisRequest,
    UploadResumeResponse,
)
from resume_fit.services.analysis_service import analyze_resume
from resume_fit.services.errors import AnalysisError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

READ_CHUNK_BYTES = 1024 * 64


def _max_upload_label() -> str:
    return f"{settings.max_upload_bytes // (1024 * 1024)}MB"


async def _read_limited(file: UploadFile) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File too large. Maximum size is {_max_upload_label()}.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/upload-resume", response_model=UploadResumeResponse)
@rate_limit()
async def upload_resume(request: Request, resume: UploadFile | None = File(default=None)):
    _ = request
    if resume is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    filename = resume.filename or "resume"
    mime_type = normalize_mime_type(resume.content_type)
    try:
        if mime_type not in ALLOWED_UPLOAD_MIME_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid file type. Only PDF, DOC, DOCX, JPG, PNG, and WEBP files are allowed.",
            )
        if resume.size is not None and resume.size > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File too large. Maximum size is {_max_upload_label()}.",
            )

        content = await _read_limited(resume)
        validate_upload_signature(mime_type=mime_type, content=content)
        extracted_text = await extract_text_async(content, mime_type)
    except ExtractionError as exc:
        logger.info("resume_upload_rejected code=%s mime=%s", exc.code, mime_type)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("resume_upload_failed mime=%s", mime_type)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Upload failed: {exc}",
        ) from exc
    finally:
        await resume.close()

    logger.info("resume_upload_extracted mime=%s bytes=%s chars=%s", mime_type, len(content), len(extracted_text))
    return UploadResumeResponse(
        extracted_text=extracted_text,
        filename=filename,
        size=len(content),
    )


@router.post("/analyze-resume", response_model=AnalyzeResumeResponse)
@rate_limit()
async def analyze_resume_endpoint(request: Request, payload: ResumeAnalysisRequest):
    _ = request
    try:
        analysis = await analyze_resume(payload.resume_text, payload.job_description)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "Invalid request data",
                "errors": [{"loc": ["body", exc.field], "msg": str(exc), "type": exc.code}],
            },
        ) from exc
    except AnalysisError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": str(exc), "code": exc.code},
        ) from exc
    return AnalyzeResumeResponse(analysis=analysis)
