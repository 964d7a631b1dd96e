"""
Period Word Assignment

Guarantees one shared glossary word per period occurrence:

1. Return the stored word for the occurrence if there is one
2. Otherwise pick a random word, skipping the most recently assigned ones
3. Insert it; the store's unique (period, period_start) key decides races,
   and a loser re-reads and returns the winner's word
4. If the store is unreachable, hand out a transient word so the request
   can still proceed

There is no application-level lock: several server instances may race,
and the unique key is what makes them converge.
"""

import random
from typing import Optional
import logging

from glossary_reminders.config import WORD_LOOKBACK
from glossary_reminders.exceptions import DatabaseUnavailableError, DuplicateError
from glossary_reminders.models.period import PeriodWindow
from glossary_reminders.models.word import PeriodWord
from glossary_reminders.observability.metrics import period_words_total

logger = logging.getLogger(__name__)


class WordAssignmentStore:
    """Get-or-create access to the word of a period occurrence"""

    def __init__(
        self,
        word_store,
        glossary,
        lookback: int = WORD_LOOKBACK,
        rng: Optional[random.Random] = None
    ):
        self.word_store = word_store
        self.glossary = glossary
        self.lookback = lookback
        self.rng = rng or random.Random()

    async def find_word(self, window: PeriodWindow) -> Optional[PeriodWord]:
        """Stored word for `window`, None if not assigned yet"""
        return await self.word_store.find_period_word(window.period, window.start, window.end)

    async def choose_word(self) -> str:
        """
        Pick a candidate word, avoiding recent repetition

        Excludes the N most recently assigned words where
        N = min(lookback, len(glossary) // 2); falls back to the whole
        glossary if nothing is left.

        Raises:
            GlossaryUnavailableError: If the glossary cannot be loaded
        """
        self.glossary.require_available()
        all_words = self.glossary.all_words()

        exclude_count = min(self.lookback, len(all_words) // 2)
        recent = set()
        if exclude_count > 0:
            try:
                recent = {w.word for w in await self.word_store.recent_words(exclude_count)}
            except DatabaseUnavailableError:
                logger.warning("Recent words unavailable, selecting from full glossary")

        candidates = [w for w in all_words if w not in recent] or all_words
        return self.rng.choice(candidates)

    async def get_or_create_word(self, window: PeriodWindow) -> PeriodWord:
        """
        Get the word for a period occurrence, assigning one if needed

        Args:
            window: Period occurrence (natural key is period + start)

        Returns:
            The stored PeriodWord, or a transient one (persisted=False) when
            the store is unreachable

        Raises:
            GlossaryUnavailableError: If no word is stored and the glossary
                cannot be loaded
        """
        try:
            existing = await self.find_word(window)
        except DatabaseUnavailableError:
            return await self._transient_word(window)

        if existing:
            logger.debug(f"Found existing word for {window.period.value}: {existing.word}")
            return existing

        selected = await self.choose_word()
        candidate = PeriodWord(period=window.period, period_start=window.start, word=selected)

        try:
            saved = await self.word_store.insert_period_word(candidate)
        except DuplicateError:
            # Another requester inserted first; use their word
            try:
                winner = await self.find_word(window)
            except DatabaseUnavailableError:
                winner = None
            if winner:
                period_words_total.labels(outcome="race_recovered").inc()
                logger.info(f"Word race for {window.period.value} resolved to {winner.word}")
                return winner
            logger.warning(f"Duplicate on insert but no stored word for {window.period.value}")
            return await self._transient_word(window, selected)
        except DatabaseUnavailableError:
            return await self._transient_word(window, selected)

        period_words_total.labels(outcome="created").inc()
        logger.info(
            f"Assigned word for {window.period.value} starting "
            f"{window.start.isoformat()}: {saved.word}"
        )
        return saved

    async def _transient_word(self, window: PeriodWindow, selected: Optional[str] = None) -> PeriodWord:
        if selected is None:
            selected = await self.choose_word()
        period_words_total.labels(outcome="transient").inc()
        logger.warning(f"Returning non-persisted word for {window.period.value}: {selected}")
        return PeriodWord(
            period=window.period,
            period_start=window.start,
            word=selected,
            persisted=False,
        )
