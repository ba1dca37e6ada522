"""
Spreadsheet import routes.

Two-step flow:
    POST /preview            upload + classify, session cached under a preview_id
    POST /confirm/{id}       append the valid candidates
    DELETE /{id}             discard the preview
"""

from fastapi import APIRouter, UploadFile, File, Form
from fastapi.responses import JSONResponse, StreamingResponse
import structlog

from config import settings
from exceptions import AppError, ImportPreviewNotFoundError, SpreadsheetParseError
from models.importing import (
    ImportPreviewResponse,
    ImportResultResponse,
    build_preview_response,
    build_result_response,
)
from services import preview_cache_service
from services.import_session_service import ImportSession, ImportStage
from services.template_service import TEMPLATE_FILENAME, get_template_service
from services.user_service import get_user_service

logger = structlog.get_logger(__name__)

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.get("/template")
async def download_template():
    """Download the blank import workbook."""
    try:
        output = get_template_service().generate_import_template()
        return StreamingResponse(
            output,
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'}
        )
    except Exception as e:
        return handle_error(e)


@router.post("/preview", response_model=ImportPreviewResponse)
async def preview_import(
    file: UploadFile = File(..., description="Spreadsheet (.xlsx) with an events sheet"),
    user_id: str = Form(..., description="User performing the import"),
):
    """
    Read and classify the spreadsheet without saving anything.

    The preview stays available for confirmation for
    PREVIEW_TTL_MINUTES minutes.
    """
    try:
        content = await file.read()
        if not content:
            raise SpreadsheetParseError("O arquivo enviado está vazio.")
        if len(content) > settings.max_upload_bytes:
            raise SpreadsheetParseError(
                "Arquivo excede o tamanho máximo permitido.",
                details={"max_upload_mb": settings.max_upload_mb, "size_bytes": len(content)}
            )

        user = get_user_service().get_by_id(user_id)

        session = ImportSession(user)
        await session.select_file(content, filename=file.filename)

        preview_id = preview_cache_service.store_session(session)

        logger.info(
            "import_preview_created",
            preview_id=preview_id,
            user_id=user.id,
            filename=file.filename,
            candidates=len(session.candidates),
            errors=len(session.errors),
        )

        return build_preview_response(preview_id, session, settings.preview_ttl_minutes)

    except AppError as e:
        return handle_error(e)
    except Exception as e:
        logger.error("import_preview_failed", error=str(e))
        return handle_error(e)


@router.post("/confirm/{preview_id}", response_model=ImportResultResponse)
async def confirm_import(preview_id: str):
    """Append every valid candidate from a cached preview."""
    try:
        session = preview_cache_service.retrieve_session(preview_id)
        if session is None:
            raise ImportPreviewNotFoundError(preview_id)

        try:
            await session.confirm_import()
        except AppError:
            # A failed commit sends the session back to upload
            if session.stage == ImportStage.UPLOAD:
                preview_cache_service.delete_session(preview_id)
            raise

        preview_cache_service.delete_session(preview_id)

        logger.info(
            "import_confirmed",
            preview_id=preview_id,
            appended=len(session.committed),
        )

        return build_result_response(session)

    except AppError as e:
        return handle_error(e)
    except Exception as e:
        logger.error("import_confirm_failed", preview_id=preview_id, error=str(e))
        return handle_error(e)


@router.delete("/{preview_id}")
async def cancel_import(preview_id: str):
    """Discard a cached preview."""
    try:
        session = preview_cache_service.retrieve_session(preview_id)
        if session is None:
            raise ImportPreviewNotFoundError(preview_id)

        session.reset()
        preview_cache_service.delete_session(preview_id)

        logger.info("import_cancelled", preview_id=preview_id)

        return {"success": True, "preview_id": preview_id}

    except AppError as e:
        return handle_error(e)
    except Exception as e:
        logger.error("import_cancel_failed", preview_id=preview_id, error=str(e))
        return handle_error(e)
