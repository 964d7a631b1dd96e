"""
GlossaryProvider - read-only word catalogue

Loads the word -> definition mapping once at startup and hands it to the
services that need it. Availability is explicit: a provider that could not
load anything reports UNAVAILABLE instead of serving an empty mapping.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from glossary_reminders.exceptions import GlossaryUnavailableError
from glossary_reminders.models.word import GlossaryEntry

logger = logging.getLogger(__name__)

FALLBACK_PATHS = (
    Path("data") / "glossary.json",
    Path(__file__).resolve().parents[2] / "data" / "glossary.json",
)


class GlossaryState(str, Enum):
    LOADED = "loaded"
    UNAVAILABLE = "unavailable"


def parse_glossary(raw: Mapping[str, Union[str, dict]]) -> dict[str, GlossaryEntry]:
    """
    Normalise glossary JSON into entries.

    Values are either a plain definition string or an object with
    `definition` and optional `arabic` keys. Entries without a usable
    definition are skipped.
    """
    entries = {}
    for word, value in raw.items():
        if isinstance(value, str):
            definition, annotation = value, None
        elif isinstance(value, dict):
            definition, annotation = value.get("definition"), value.get("arabic") or None
        else:
            definition, annotation = None, None

        if not word or not definition or not isinstance(definition, str):
            logger.warning(f"Skipping glossary entry without definition: {word!r}")
            continue
        if annotation is not None and not isinstance(annotation, str):
            logger.warning(f"Skipping glossary entry with non-text annotation: {word!r}")
            continue
        entries[word] = GlossaryEntry(word=word, definition=definition, annotation=annotation)
    return entries


class GlossaryProvider:
    """
    Read-only glossary with an explicit loaded/unavailable state.

    Safe for concurrent readers: the mapping is replaced wholesale on load
    and never mutated in place.
    """

    def __init__(self, paths: Optional[Iterable[Path]] = None):
        self.paths = [Path(p) for p in (FALLBACK_PATHS if paths is None else paths)]
        self._entries: dict[str, GlossaryEntry] = {}
        self.state = GlossaryState.UNAVAILABLE
        self.source: Optional[Path] = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Union[str, dict]]) -> "GlossaryProvider":
        """Build a provider from an in-memory mapping"""
        provider = cls(paths=[])
        provider._set_entries(parse_glossary(raw), source=None)
        return provider

    def _set_entries(self, entries: dict[str, GlossaryEntry], source: Optional[Path]) -> None:
        if entries:
            self._entries = entries
            self.state = GlossaryState.LOADED
            self.source = source

    def load(self) -> GlossaryState:
        """
        Try each candidate path until one yields a non-empty glossary

        Returns:
            The resulting state; never raises for missing or bad files
        """
        for path in self.paths:
            if not path.exists():
                logger.info(f"Glossary path does not exist: {path}")
                continue
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Error loading glossary from {path}: {e}")
                continue
            if not isinstance(raw, dict):
                logger.error(f"Glossary at {path} is not a JSON object")
                continue

            entries = parse_glossary(raw)
            if not entries:
                logger.warning(f"Glossary loaded from {path} but appears to be empty")
                continue

            self._set_entries(entries, source=path)
            logger.info(f"Glossary loaded from {path} with {len(entries)} words")
            return self.state

        if self.state != GlossaryState.LOADED:
            logger.error("CRITICAL: Failed to load glossary from all candidate paths")
        return self.state

    @property
    def is_available(self) -> bool:
        return self.state == GlossaryState.LOADED

    def require_available(self) -> None:
        """
        Ensure the glossary can be served, reloading once if needed

        Raises:
            GlossaryUnavailableError: If still unavailable after one reload
        """
        if self.is_available:
            return
        logger.warning("Glossary unavailable, attempting reload")
        self.load()
        if not self.is_available:
            raise GlossaryUnavailableError(
                context={"paths": [str(p) for p in self.paths]}
            )

    def lookup(self, word: str) -> Optional[GlossaryEntry]:
        """Get the entry for `word`, None if it is not in the glossary"""
        return self._entries.get(word)

    def all_words(self) -> list[str]:
        """All words in source order"""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
