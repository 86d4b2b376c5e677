import asyncio
import time
from collections.abc import Callable, Iterable

from docbrief.analysis.base import BaseAnalyzer
from docbrief.analysis.factory import AnalyzerFactory
from docbrief.analysis.models import (
    AnalysisFailure,
    AnalysisOutcome,
    AnalysisSuccess,
    generic_failure_message,
)
from docbrief.complexity.scorer import analyze_complexity
from docbrief.config.settings import Settings
from docbrief.extraction.exceptions import EXTRACTION_MESSAGES, ExtractionError, ExtractionErrorKind
from docbrief.extraction.extractor import DocumentExtractor
from docbrief.extraction.factory import PdfExtractorFactory
from docbrief.intake.file_validator import validate_file
from docbrief.intake.models import DocumentKind, FileValidationError, UploadedFile
from docbrief.logging.logger import Log
from docbrief.processor.models import TIMEOUT_MESSAGE, ProcessingPhase, ProcessingSession
from docbrief.qa.chat import ContractChat
from docbrief.store.result_store import ResultStore
from docbrief.usage.limiter import USAGE_LIMIT_MESSAGE, UsageLimiter
from docbrief.usage.storage import JsonFileStore
from docbrief.validation.messages import message_for
from docbrief.validation.models import TextValidationError
from docbrief.validation.text_validator import validate_extracted_text

SessionListener = Callable[[ProcessingSession], None]


class IntakeProcessor:
    """Sequences one uploaded file or pasted text through validation and analysis.

    Pipeline: select -> extract -> validate -> (await override) -> analyze -> hand off.
    Pasted text skips the extract step. ``document_kind`` decides whether the
    contract-likeness warning applies and which failure copy is shown.

    Every failure ends in a session phase rather than an exception. Async
    completions check the session generation before touching state, so a
    response that arrives after a timeout or reset is dropped.
    """

    def __init__(
        self,
        *,
        extractor: DocumentExtractor,
        analyzer: BaseAnalyzer,
        store: ResultStore,
        settings: Settings,
        document_kind: DocumentKind = DocumentKind.CONTRACT,
        usage_limiter: UsageLimiter | None = None,
        identity_token: str | None = None,
        clock: Callable[[], float] = time.monotonic,
        listeners: Iterable[SessionListener] = (),
    ) -> None:
        self._extractor = extractor
        self._analyzer = analyzer
        self._store = store
        self._settings = settings
        self._document_kind = document_kind
        self._usage_limiter = usage_limiter
        self._identity_token = identity_token
        self._clock = clock
        self._listeners = list(listeners)
        self._generation = 0
        self._session = ProcessingSession(session_id=0)
        self._late_requests: set[asyncio.Task[AnalysisOutcome]] = set()

    @property
    def session(self) -> ProcessingSession:
        return self._session

    @property
    def phase(self) -> ProcessingPhase:
        return self._session.phase

    @property
    def store(self) -> ResultStore:
        return self._store

    @property
    def document_kind(self) -> DocumentKind:
        return self._document_kind

    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def create_chat(self) -> ContractChat:
        """Follow-up Q&A over this processor's store, asked through the same analyzer."""
        return ContractChat(self._store, self._analyzer)

    def select_file(self, file: UploadedFile) -> FileValidationError | None:
        """Replace the current file, resetting every trace of the previous session.

        Type and size are checked here, before any extraction work.
        """
        self.reset()
        error = validate_file(file, self._settings.max_file_size_bytes)
        if error is not None:
            Log.warning(f"Rejected file {file.name}", reason=error.value, size=file.size)
            self._store.set_error(str(message_for(error)))
            return error
        self._store.set_file(file)
        Log.info(f"Selected file {file.name}", size=file.size, media_type=file.media_type)
        return None

    def select_text(self, text: str) -> TextValidationError | None:
        """Replace the current input with pasted text, which skips extraction.

        Blank text is refused here; everything else goes through the same
        validation chain as extracted text once processing starts.
        """
        self.reset()
        text = text.strip()
        if not text:
            Log.warning("Rejected empty pasted text")
            self._store.set_error(str(message_for(TextValidationError.INSUFFICIENT_TEXT)))
            return TextValidationError.INSUFFICIENT_TEXT
        self._store.set_pasted_text(text)
        Log.info(f"Selected pasted text ({len(text)} chars)", document_kind=self._document_kind.value)
        return None

    async def process(self) -> ProcessingSession:
        """Start processing the selected file or pasted text.

        Runs until the session succeeds, fails, times out or pauses for a
        user decision. Only an idle session can start; repeated calls return
        the live session untouched.
        """
        if self._session.phase is not ProcessingPhase.IDLE:
            Log.debug("Processing already started, ignoring trigger", session_id=self._session.session_id)
            return self._session
        file = self._store.file
        pasted_text = self._store.pasted_text
        if file is None and pasted_text is None:
            Log.warning("Nothing to process: no file or text selected")
            return self._session

        session = self._begin_session()
        if self._usage_limiter is not None and self._usage_limiter.has_used_today():
            self._fail(session, USAGE_LIMIT_MESSAGE, kind="usage_limit_reached")
            return session

        self._store.set_is_analyzing(True)
        if file is None:
            await self._validate(session, pasted_text or "")
            return session

        self._transition(session, ProcessingPhase.EXTRACTING)
        text = await self._extract(session, file)
        if text is None or not self._is_current(session):
            return session

        await self._validate(session, text)
        return session

    async def continue_anyway(self) -> ProcessingSession:
        """Resume a session paused on a soft warning and send it for analysis."""
        session = self._session
        if session.phase is not ProcessingPhase.AWAITING_OVERRIDE or session.pending_text is None:
            Log.debug("No pending warning to override", phase=session.phase.value)
            return session
        text = session.pending_text
        session.pending_text = None
        Log.info("User chose to continue despite warning", session_id=session.session_id)
        self._start_clock(session)
        await self._send(session, text)
        return session

    def cancel_override(self) -> None:
        """Drop a session paused on a soft warning and clear the selected file."""
        if self._session.phase is not ProcessingPhase.AWAITING_OVERRIDE:
            return
        Log.info("User cancelled after warning", session_id=self._session.session_id)
        self.reset()

    def reset(self) -> None:
        """Return to idle, clearing the store and disarming any pending timer."""
        previous = self._session
        self._cancel_timeout(previous)
        self._interrupt(previous)
        self._generation += 1
        self._session = ProcessingSession(session_id=self._generation)
        self._store.reset()
        if previous.phase is not ProcessingPhase.IDLE:
            Log.debug("Session reset", previous_session_id=previous.session_id)
        self._notify(self._session)

    def _begin_session(self) -> ProcessingSession:
        self._generation += 1
        session = ProcessingSession(session_id=self._generation)
        self._session = session
        Log.info(
            "Processing session started",
            session_id=session.session_id,
            document_kind=self._document_kind.value,
        )
        return session

    async def _extract(self, session: ProcessingSession, file: UploadedFile) -> str | None:
        try:
            return await asyncio.to_thread(self._extractor.extract, file)
        except ExtractionError as exc:
            if self._is_current(session):
                self._fail(session, exc.message, kind=exc.kind.value)
            return None
        except Exception:
            Log.exception("Unexpected extraction failure", session_id=session.session_id)
            if self._is_current(session):
                self._fail(
                    session,
                    EXTRACTION_MESSAGES[ExtractionErrorKind.CORRUPTED],
                    kind=ExtractionErrorKind.CORRUPTED.value,
                )
            return None

    async def _validate(self, session: ProcessingSession, text: str) -> None:
        self._start_clock(session)
        self._transition(session, ProcessingPhase.VALIDATING)

        result = validate_extracted_text(
            text,
            check_contract_keywords=self._document_kind is DocumentKind.CONTRACT,
        )
        session.validation = result
        session.complexity = analyze_complexity(text)
        Log.info(
            "Validation finished",
            session_id=session.session_id,
            characters=result.character_count,
            keywords=result.keyword_count,
            error=result.error.value if result.error else None,
            warning=result.warning.value if result.warning else None,
            complexity=session.complexity.value,
        )

        if result.error is not None:
            self._fail(session, str(message_for(result.error)), kind=result.error.value)
            return

        if result.warning is not None:
            # The timer restarts on continue_anyway.
            self._cancel_timeout(session)
            session.pending_text = text
            self._store.set_is_analyzing(False)
            self._transition(session, ProcessingPhase.AWAITING_OVERRIDE)
            return

        await self._send(session, text)

    async def _send(self, session: ProcessingSession, text: str) -> None:
        self._store.set_extracted_text(text)
        self._store.set_is_analyzing(True)
        session.interrupted = asyncio.get_running_loop().create_future()
        self._transition(session, ProcessingPhase.SENDING_TO_ANALYSIS)

        request = asyncio.ensure_future(
            self._analyzer.analyze(text, identity_token=self._identity_token)
        )
        await asyncio.wait({request, session.interrupted}, return_when=asyncio.FIRST_COMPLETED)

        if not request.done():
            self._late_requests.add(request)
            request.add_done_callback(self._discard_late_response)
            return

        outcome = self._outcome_of(request)
        if not self._is_current(session) or session.phase is not ProcessingPhase.SENDING_TO_ANALYSIS:
            Log.info("Discarding stale analysis response", session_id=session.session_id)
            return

        self._cancel_timeout(session)
        if isinstance(outcome, AnalysisFailure):
            self._fail(session, outcome.message, kind=outcome.code or "analysis_failed")
            return

        self._store.set_analysis(outcome)
        if outcome.is_wrong_document_type:
            Log.info("Analysis flagged a different document type", document_type=outcome.document_type)
        await self._finish_after_min_display(session)

    async def _finish_after_min_display(self, session: ProcessingSession) -> None:
        started_at = session.started_at if session.started_at is not None else self._clock()
        remaining = self._settings.min_display_seconds - (self._clock() - started_at)
        if remaining > 0:
            await asyncio.sleep(remaining)
        if not self._is_current(session) or session.phase is not ProcessingPhase.SENDING_TO_ANALYSIS:
            return
        if self._usage_limiter is not None:
            self._usage_limiter.mark_used()
        self._transition(session, ProcessingPhase.SUCCEEDED)

    def _outcome_of(self, request: "asyncio.Task[AnalysisOutcome]") -> AnalysisOutcome:
        failure_message = generic_failure_message(self._document_kind)
        try:
            outcome = request.result()
        except Exception as exc:
            Log.exception("Analysis call raised")
            return AnalysisFailure(message=failure_message, detail=str(exc))
        if not isinstance(outcome, (AnalysisSuccess, AnalysisFailure)):
            Log.error(f"Analyzer returned unexpected type {type(outcome).__name__}")
            return AnalysisFailure(message=failure_message, detail="unexpected analyzer result")
        return outcome

    def _discard_late_response(self, request: "asyncio.Task[AnalysisOutcome]") -> None:
        self._late_requests.discard(request)
        if request.cancelled():
            return
        exc = request.exception()
        if exc is not None:
            Log.warning(f"Late analysis request failed after session ended: {exc}")
        else:
            Log.info("Discarding stale analysis response")

    def _start_clock(self, session: ProcessingSession) -> None:
        session.started_at = self._clock()
        self._cancel_timeout(session)
        loop = asyncio.get_running_loop()
        session.timeout_handle = loop.call_later(
            self._settings.max_processing_seconds,
            self._on_timeout,
            session.session_id,
        )

    def _on_timeout(self, session_id: int) -> None:
        session = self._session
        if session.session_id != session_id or session.phase.is_terminal:
            return
        session.timeout_handle = None
        Log.warning(
            "Processing timed out",
            session_id=session_id,
            after_seconds=self._settings.max_processing_seconds,
        )
        session.error_message = TIMEOUT_MESSAGE
        session.error_kind = "timeout"
        self._store.set_error(TIMEOUT_MESSAGE)
        self._interrupt(session)
        self._transition(session, ProcessingPhase.TIMED_OUT)

    def _fail(self, session: ProcessingSession, message: str, *, kind: str) -> None:
        self._cancel_timeout(session)
        session.error_message = message
        session.error_kind = kind
        self._store.set_error(message)
        Log.warning("Processing failed", session_id=session.session_id, kind=kind)
        self._transition(session, ProcessingPhase.FAILED)

    def _transition(self, session: ProcessingSession, phase: ProcessingPhase) -> None:
        Log.debug(
            "Session transition",
            session_id=session.session_id,
            source=session.phase.value,
            target=phase.value,
        )
        session.phase = phase
        self._notify(session)

    def _notify(self, session: ProcessingSession) -> None:
        for listener in self._listeners:
            try:
                listener(session)
            except Exception:
                Log.exception("Session listener failed", session_id=session.session_id)

    def _is_current(self, session: ProcessingSession) -> bool:
        return session.session_id == self._session.session_id

    @staticmethod
    def _cancel_timeout(session: ProcessingSession) -> None:
        if session.timeout_handle is not None:
            session.timeout_handle.cancel()
            session.timeout_handle = None

    @staticmethod
    def _interrupt(session: ProcessingSession) -> None:
        if session.interrupted is not None and not session.interrupted.done():
            session.interrupted.set_result(None)


def build_processor(
    settings: Settings,
    *,
    document_kind: DocumentKind = DocumentKind.CONTRACT,
    identity_token: str | None = None,
    listeners: Iterable[SessionListener] = (),
) -> IntakeProcessor:
    """Build an IntakeProcessor with the configured adapters for one document kind."""
    extractor = PdfExtractorFactory.create_document_extractor(settings)
    analyzer = AnalyzerFactory.create(settings, document_kind)
    store = ResultStore(max_chat_exchanges=settings.max_chat_exchanges)
    usage_limiter = UsageLimiter(
        JsonFileStore(settings.usage_store_path),
        founder_mode=settings.founder_mode,
    )
    return IntakeProcessor(
        extractor=extractor,
        analyzer=analyzer,
        store=store,
        settings=settings,
        document_kind=document_kind,
        usage_limiter=usage_limiter,
        identity_token=identity_token,
        listeners=listeners,
    )
