"""
WordService - current word and word history

Read-side companion to the check-in flow: serves the period's word with its
definition, and the list of recently assigned words.
"""

import logging
import random
from datetime import datetime, timezone
from typing import List, Optional

from glossary_reminders.gamification.period_clock import current_window
from glossary_reminders.models.word import CurrentWord, WordHistoryEntry

logger = logging.getLogger(__name__)

HISTORY_SIZE = 10


class WordService:
    """Service for reading period words"""

    def __init__(
        self,
        word_assignment,
        glossary,
        utc_offset_hours: Optional[int] = None,
        rng: Optional[random.Random] = None
    ):
        self.words = word_assignment
        self.glossary = glossary
        self.utc_offset_hours = utc_offset_hours
        self.rng = rng or random.Random()

    async def current_word(self, now: Optional[datetime] = None) -> CurrentWord:
        """
        Get the word for the current period, assigning one if needed.

        If the stored word has since been dropped from the glossary, a random
        glossary word is served instead with fallback=True; the stored
        assignment is left as it is.

        Raises:
            GlossaryUnavailableError: The glossary cannot be loaded
        """
        if now is None:
            now = datetime.now(timezone.utc)

        # Definitions are needed even when the word is already stored
        self.glossary.require_available()

        window = current_window(now, self.utc_offset_hours)
        period_word = await self.words.get_or_create_word(window)

        entry = self.glossary.lookup(period_word.word)
        fallback = False
        if entry is None:
            logger.error(f"Word not found in glossary: {period_word.word}")
            entry = self.glossary.lookup(self.rng.choice(self.glossary.all_words()))
            fallback = True
            logger.info(f"Selected fallback word: {entry.word}")

        return CurrentWord(
            word=entry.word,
            definition=entry.definition,
            annotation=entry.annotation,
            period=window.period,
            next_update=window.end,
            fallback=fallback,
            persisted=period_word.persisted,
        )

    async def history(self, limit: int = HISTORY_SIZE) -> List[WordHistoryEntry]:
        """Most recently assigned words, newest first, with definitions"""
        recent = await self.words.word_store.recent_words(limit)

        entries = []
        for period_word in recent:
            glossary_entry = self.glossary.lookup(period_word.word)
            entries.append(WordHistoryEntry(
                word=period_word.word,
                definition=glossary_entry.definition if glossary_entry else None,
                annotation=glossary_entry.annotation if glossary_entry else None,
                period=period_word.period,
                period_start=period_word.period_start,
            ))
        return entries
