from docbrief.analysis.base import BaseAnalyzer
from docbrief.logging.logger import Log
from docbrief.store.result_store import ResultStore

CHAT_ERROR_REPLY = "Sorry, I couldn't process your question. Please try again."


class ContractChat:
    """Follow-up questions about the analyzed document held in a ResultStore."""

    def __init__(self, store: ResultStore, analyzer: BaseAnalyzer) -> None:
        self._store = store
        self._analyzer = analyzer

    @property
    def can_ask(self) -> bool:
        return (
            self._store.analysis is not None
            and self._store.extracted_text is not None
            and not self._store.chat_limit_reached
        )

    async def ask(self, question: str) -> str | None:
        """Send a question and record both sides of the exchange.

        Returns the assistant reply (or the apology text on failure), or None
        when nothing was sent (blank question, no analysis yet, history cap
        reached) or the store was reset before the reply arrived.
        """
        question = question.strip()
        if not question:
            return None
        analysis = self._store.analysis
        original_text = self._store.extracted_text
        if analysis is None or original_text is None:
            Log.warning("Question asked before an analysis was available")
            return None
        if not self._store.add_chat_message("user", question):
            Log.info("Chat limit reached, question not sent")
            return None
        generation = self._store.generation

        try:
            reply = await self._analyzer.ask(
                original_text=original_text,
                analysis_result=analysis.analysis,
                messages=[message.to_wire() for message in self._store.chat_messages],
            )
        except Exception as exc:
            Log.error(f"Q&A request failed: {exc}", error_type=type(exc).__name__)
            reply = CHAT_ERROR_REPLY

        if self._store.generation != generation:
            Log.info("Discarding Q&A reply for a document that is no longer loaded")
            return None
        self._store.add_chat_message("assistant", reply)
        return reply
