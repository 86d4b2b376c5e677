from typing import Literal

from docbrief.analysis.models import AnalysisSuccess, ChatMessage
from docbrief.intake.models import UploadedFile

DEFAULT_MAX_CHAT_EXCHANGES = 20


class ResultStore:
    """Holds the current document, its analysis and the Q&A history.

    One instance per user session, owned by whoever builds the processor.
    All mutation goes through the setters below; readers use the properties.
    """

    def __init__(self, max_chat_exchanges: int = DEFAULT_MAX_CHAT_EXCHANGES) -> None:
        self._max_chat_messages = max_chat_exchanges * 2
        self._generation = 0
        self._file: UploadedFile | None = None
        self._pasted_text: str | None = None
        self._extracted_text: str | None = None
        self._analysis: AnalysisSuccess | None = None
        self._error: str | None = None
        self._is_analyzing = False
        self._chat_messages: list[ChatMessage] = []

    @property
    def generation(self) -> int:
        """Bumped by every reset; async callers compare it to drop stale results."""
        return self._generation

    @property
    def file(self) -> UploadedFile | None:
        return self._file

    @property
    def file_name(self) -> str | None:
        return self._file.name if self._file is not None else None

    @property
    def pasted_text(self) -> str | None:
        return self._pasted_text

    @property
    def extracted_text(self) -> str | None:
        return self._extracted_text

    @property
    def analysis(self) -> AnalysisSuccess | None:
        return self._analysis

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def is_analyzing(self) -> bool:
        return self._is_analyzing

    @property
    def chat_messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._chat_messages)

    @property
    def chat_limit_reached(self) -> bool:
        return len(self._chat_messages) >= self._max_chat_messages

    def set_file(self, file: UploadedFile | None) -> None:
        self._file = file
        self._error = None

    def set_pasted_text(self, text: str | None) -> None:
        self._pasted_text = text
        self._error = None

    def set_extracted_text(self, text: str) -> None:
        self._extracted_text = text

    def set_analysis(self, analysis: AnalysisSuccess) -> None:
        self._analysis = analysis
        self._is_analyzing = False

    def set_error(self, error: str | None) -> None:
        self._error = error
        self._is_analyzing = False

    def set_is_analyzing(self, is_analyzing: bool) -> None:
        self._is_analyzing = is_analyzing

    def add_chat_message(self, role: Literal["user", "assistant"], content: str) -> bool:
        """Append a message; returns False once the history cap is reached."""
        if self.chat_limit_reached:
            return False
        self._chat_messages.append(ChatMessage(role=role, content=content))
        return True

    def reset(self) -> None:
        self._generation += 1
        self._file = None
        self._pasted_text = None
        self._extracted_text = None
        self._analysis = None
        self._error = None
        self._is_analyzing = False
        self._chat_messages = []
