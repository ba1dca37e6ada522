"""
Import session: the controller behind the spreadsheet import screen.

Stages:
    UPLOAD -> PREVIEW -> COMMITTING -> RESULT -> (reset) UPLOAD

- UPLOAD -> PREVIEW: file read and every row classified.
  An unreadable or empty file goes back to UPLOAD with an error.
- PREVIEW -> COMMITTING: explicit confirmation, only when there is at
  least one valid candidate.
- COMMITTING -> RESULT: every candidate appended in one store call.
  A failed append aborts the whole session back to UPLOAD.
- RESULT -> UPLOAD: reset.

One session serves one user interaction; nothing else may run against
it while a file is being read or a commit is in flight.
"""

import asyncio
from datetime import datetime
from enum import Enum
from typing import Callable, Optional
import structlog

from config import settings
from exceptions import (
    ImportCommitError,
    InvalidImportStageError,
    NothingToImportError,
    SpreadsheetParseError,
)
from models.proposal import Proposal
from models.user import User
from parsers.batch_validator import ImportStatus, ImportSummary, validate_sheet
from parsers.proposal_synthesizer import ImportContext
from parsers.row_classifier import CorrectionLog, FieldValidationError
from parsers.spreadsheet_reader import SpreadsheetSource, read_spreadsheet
from services.proposal_service import ProposalService, get_proposal_service

logger = structlog.get_logger(__name__)

Notifier = Callable[[str, str], None]

COMMIT_SUCCESS_MESSAGE = "Dados da aba de eventos importados com sucesso."
NOTIFY_SUCCESS = "Importação de eventos concluída."
NOTIFY_COMMIT_FAILED = "Falha ao gravar as propostas importadas. Nenhuma proposta foi salva."


class ImportStage(str, Enum):
    UPLOAD = "upload"
    PREVIEW = "preview"
    COMMITTING = "committing"
    RESULT = "result"


def _log_notification(message: str, level: str) -> None:
    logger.info("import_notification", level=level, message=message)


class ImportSession:
    """
    State machine for one spreadsheet import.

    Read-only state for rendering: stage, candidates, errors,
    corrections, summary, sheet_name and committed.
    """

    def __init__(
        self,
        user: User,
        proposal_store: Optional[ProposalService] = None,
        notify: Optional[Notifier] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.user = user
        self._store = proposal_store
        self._notify = notify or _log_notification
        self._clock = clock
        self._busy = False
        self._clear()

    def _clear(self) -> None:
        self._stage = ImportStage.UPLOAD
        self._candidates: list[Proposal] = []
        self._errors: list[FieldValidationError] = []
        self._corrections: list[CorrectionLog] = []
        self._summary: Optional[ImportSummary] = None
        self._sheet_name: Optional[str] = None
        self._committed: list[Proposal] = []

    # ===================
    # READ-ONLY STATE
    # ===================

    @property
    def stage(self) -> ImportStage:
        return self._stage

    @property
    def candidates(self) -> list[Proposal]:
        return list(self._candidates)

    @property
    def errors(self) -> list[FieldValidationError]:
        return list(self._errors)

    @property
    def corrections(self) -> list[CorrectionLog]:
        return list(self._corrections)

    @property
    def summary(self) -> Optional[ImportSummary]:
        return self._summary

    @property
    def sheet_name(self) -> Optional[str]:
        return self._sheet_name

    @property
    def committed(self) -> list[Proposal]:
        return list(self._committed)

    @property
    def can_confirm(self) -> bool:
        """The confirm button is enabled only with something to import."""
        return (
            not self._busy
            and self._stage == ImportStage.PREVIEW
            and len(self._candidates) > 0
        )

    # ===================
    # ACTIONS
    # ===================

    async def select_file(self, file: SpreadsheetSource, filename: Optional[str] = None) -> None:
        """
        Read and classify a spreadsheet, moving to PREVIEW.

        Any previous state is discarded first.

        Raises:
            InvalidImportStageError: While a read or commit is in progress
            SpreadsheetParseError: File unreadable or empty; the session
                is back in UPLOAD
        """
        self._ensure_idle("select a file")
        self._clear()
        self._busy = True

        logger.info("import_file_selected", user_id=self.user.id, filename=filename)

        try:
            sheet = await asyncio.to_thread(read_spreadsheet, file)
            context = ImportContext(
                user=self.user,
                imported_at=self._clock(),
                return_days=settings.import_return_days,
                reminder_days=settings.import_reminder_days,
            )
            batch = validate_sheet(sheet, context)
        except SpreadsheetParseError as e:
            logger.error(
                "import_file_rejected",
                filename=filename,
                error=e.message
            )
            self._clear()
            self._notify(e.message, "error")
            raise
        finally:
            self._busy = False

        self._candidates = batch.candidates
        self._errors = batch.errors
        self._corrections = batch.corrections
        self._summary = batch.summary
        self._sheet_name = sheet.sheet_name
        self._stage = ImportStage.PREVIEW

        logger.info(
            "import_preview_ready",
            sheet=sheet.sheet_name,
            total_analyzed=batch.summary.total_analyzed,
            candidates=len(batch.candidates),
            errors=len(batch.errors),
            corrections=len(batch.corrections),
        )

    async def confirm_import(self) -> None:
        """
        Append every candidate to the proposal store, moving to RESULT.

        Raises:
            InvalidImportStageError: Not in PREVIEW, or already committing
            NothingToImportError: No valid candidate (regardless of errors)
            ImportCommitError: The append failed; nothing was stored and
                the session is back in UPLOAD
        """
        self._ensure_idle("confirm the import")
        if self._stage != ImportStage.PREVIEW:
            raise InvalidImportStageError(self._stage.value, "confirm the import")
        if not self._candidates:
            raise NothingToImportError(errors_count=len(self._errors))

        self._stage = ImportStage.COMMITTING
        self._busy = True
        store = self._store or get_proposal_service()

        logger.info("import_commit_started", candidates=len(self._candidates))

        try:
            committed = await asyncio.to_thread(store.append_many, list(self._candidates))
        except Exception as e:
            logger.error(
                "import_commit_failed",
                candidates=len(self._candidates),
                error=str(e),
                error_type=type(e).__name__
            )
            failed_summary = self._summary.mark(ImportStatus.ERROR, NOTIFY_COMMIT_FAILED)
            self._clear()
            self._notify(NOTIFY_COMMIT_FAILED, "error")
            raise ImportCommitError(
                NOTIFY_COMMIT_FAILED,
                details={
                    "summary": {
                        "total_analyzed": failed_summary.total_analyzed,
                        "new_proposals": failed_summary.new_proposals,
                        "status": failed_summary.status.value,
                    },
                    "original_error": str(e),
                }
            ) from e
        finally:
            self._busy = False

        self._committed = list(committed)
        self._summary = self._summary.mark(ImportStatus.SUCCESS, COMMIT_SUCCESS_MESSAGE)
        self._stage = ImportStage.RESULT

        logger.info("import_commit_completed", appended=len(self._committed))
        self._notify(NOTIFY_SUCCESS, "success")

    def reset(self) -> None:
        """Back to UPLOAD, discarding every piece of session state."""
        self._ensure_idle("reset")
        previous = self._stage
        self._clear()
        logger.info("import_session_reset", previous_stage=previous.value)

    def _ensure_idle(self, action: str) -> None:
        if self._busy or self._stage == ImportStage.COMMITTING:
            raise InvalidImportStageError(self._stage.value, action)
