from collections.abc import Callable
from datetime import date

from docbrief.logging.logger import Log
from docbrief.usage.storage import FailOpenStore, KeyValueStore

STORAGE_KEY = "free_explanation_last_used_date"

USAGE_LIMIT_MESSAGE = (
    "You've used your free explanation for today. Please come back tomorrow."
)


class UsageLimiter:
    """Soft daily limit on free analyses, keyed by local calendar day.

    Fails open: a missing or broken store always means "not used yet".
    Founder mode disables tracking entirely.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        founder_mode: bool = False,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = FailOpenStore(store)
        self._founder_mode = founder_mode
        self._today = today

    def has_used_today(self) -> bool:
        if self._founder_mode:
            return False
        return self._store.get(STORAGE_KEY) == self._today_string()

    def mark_used(self) -> None:
        """Record today's use. Call only after a successful analysis."""
        if self._founder_mode:
            return
        self._store.set(STORAGE_KEY, self._today_string())
        Log.debug("Free usage marked", date=self._today_string())

    def reset(self) -> None:
        self._store.remove(STORAGE_KEY)

    def last_used_date(self) -> str | None:
        return self._store.get(STORAGE_KEY)

    def _today_string(self) -> str:
        return self._today().strftime("%Y-%m-%d")
