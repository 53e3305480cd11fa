"""
In-memory cache of finished translations and summaries.

Benefits:
- Cost savings: a document is sent to the paid API once per session
- Speed: re-opening a document shows its translation immediately

Two independent namespaces keyed by document id. No TTL, no eviction and no
persistence: results are reproducible by calling the API again, and the
process lifetime bounds the size. Entries leave only through invalidate()
or clear(), e.g. when the underlying document is re-fetched.
"""

import threading
from typing import Optional

from .logger import get_module_logger

logger = get_module_logger("result_cache")


class ResultCache:
    """Thread-safe translation/summary store keyed by document id."""

    def __init__(self):
        self._lock = threading.Lock()
        self._translations: dict[str, str] = {}
        self._summaries: dict[str, str] = {}

    def lookup_translation(self, document_id: str) -> Optional[str]:
        """Return the cached translation, or None on a miss."""
        with self._lock:
            return self._translations.get(document_id)

    def lookup_summary(self, document_id: str) -> Optional[str]:
        """Return the cached summary, or None on a miss."""
        with self._lock:
            return self._summaries.get(document_id)

    def store_translation(self, document_id: str, text: str) -> None:
        with self._lock:
            self._translations[document_id] = text
        logger.debug(f"Stored translation for {document_id} ({len(text)} chars)")

    def store_summary(self, document_id: str, text: str) -> None:
        with self._lock:
            self._summaries[document_id] = text
        logger.debug(f"Stored summary for {document_id} ({len(text)} chars)")

    def invalidate(self, document_id: str) -> bool:
        """
        Drop both the translation and the summary for a document.

        Returns:
            True if anything was removed
        """
        with self._lock:
            had_translation = self._translations.pop(document_id, None) is not None
            had_summary = self._summaries.pop(document_id, None) is not None

        removed = had_translation or had_summary
        if removed:
            logger.info(f"Invalidated cached results for {document_id}")
        return removed

    def clear(self) -> int:
        """Empty both namespaces. Returns count of removed entries."""
        with self._lock:
            count = len(self._translations) + len(self._summaries)
            self._translations.clear()
            self._summaries.clear()
        logger.info(f"Cleared {count} cached results")
        return count

    def translation_count(self) -> int:
        with self._lock:
            return len(self._translations)

    def summary_count(self) -> int:
        with self._lock:
            return len(self._summaries)
