"""
Main orchestrator for the HTML translator.

Coordinates the pipeline for one document:

  translate: cache → Sanitizer → Chunker → LLMClient (once per chunk, in order)
             → join with "\n" → cache
  summarize: cache → Sanitizer → LLMClient (whole document) → cache

A cache hit skips every stage. Translation is all-or-nothing: if any chunk
fails, the translated chunks so far are discarded, nothing is cached and the
error propagates to the caller.
"""

import threading
from contextlib import contextmanager
from typing import Optional

from .schemas import Settings, CompletionOptions
from .sanitizer import Sanitizer
from .chunker import Chunker
from .llm_client import BaseLLMClient, OpenAIChatClient
from .result_cache import ResultCache
from .credentials import CredentialStore, EnvCredentialStore
from .exceptions import MissingCredentialError, TranslationError
from .logger import get_module_logger

logger = get_module_logger("translator")


# --- LLM Prompt Design ---
# The model sees one chunk at a time and has no idea there are others, so the
# translation prompt insists on returning the HTML as-is apart from the text;
# the chunks are glued back together without any post-processing.

TRANSLATION_PROMPT = """You are a professional translator. Translate the following HTML content into {language}. Requirements:
1. Keep every HTML tag and the document structure unchanged
2. Translate only the text content
3. Do not translate code inside code blocks
4. Keep link URLs unchanged
5. Return the translated HTML directly, without any extra explanation"""

SUMMARY_PROMPT = """You are a professional content summarizer. Summarize the following article. Requirements:
1. Write the summary in {language}
2. Keep it concise and capture the core points of the article
3. Output HTML; you may use tags such as <p>, <ul> and <li>
4. Keep the summary within {max_characters} characters
5. Return the summary HTML directly, without a "Summary" heading"""


class _InFlightGuard:
    """
    Per-key locks so that concurrent requests for the same document run one
    at a time. The second caller then finds the first caller's result in the
    cache instead of paying for the same request twice. Locks for different
    keys are independent and are dropped once nobody holds or waits on them.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: dict[tuple, list] = {}  # key -> [lock, users]

    @contextmanager
    def hold(self, key: tuple):
        with self._lock:
            entry = self._entries.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1

        entry[0].acquire()
        try:
            yield
        finally:
            entry[0].release()
            with self._lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]


class Translator:
    """
    Main orchestrator: translation and summarization of HTML documents.

    All collaborators are injected; anything not supplied is built from
    ``settings``. One instance owns one cache and should be shared by every
    caller that wants to benefit from it.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        credentials: Optional[CredentialStore] = None,
        llm_client: Optional[BaseLLMClient] = None,
        cache: Optional[ResultCache] = None,
        sanitizer: Optional[Sanitizer] = None,
        chunker: Optional[Chunker] = None
    ):
        self.settings = settings or Settings()
        self.credentials = credentials or EnvCredentialStore()
        # Lazy-create the real client only if one wasn't injected, sharing the
        # credential store so both see the same key.
        self.llm_client = llm_client or OpenAIChatClient(
            settings=self.settings, credentials=self.credentials
        )
        self.cache = cache if cache is not None else ResultCache()
        self.sanitizer = sanitizer or Sanitizer()
        self.chunker = chunker or Chunker(max_length=self.settings.max_chunk_length)

        self._in_flight = _InFlightGuard()

        logger.info(
            f"Translator initialized (model={self.settings.model}, "
            f"target_language={self.settings.target_language})"
        )

    @property
    def has_api_key(self) -> bool:
        return self.credentials.has_api_key

    # --- Cache passthroughs (caller-facing surface) ---

    def cached_translation(self, document_id: str) -> Optional[str]:
        return self.cache.lookup_translation(document_id)

    def cached_summary(self, document_id: str) -> Optional[str]:
        return self.cache.lookup_summary(document_id)

    def invalidate(self, document_id: str) -> None:
        """Forget both results for a document whose content has changed."""
        self.cache.invalidate(document_id)

    def clear(self) -> int:
        return self.cache.clear()

    # --- Pipeline entry points ---

    def translate(self, document_id: str, html: str) -> str:
        """
        Translate an HTML document into the configured target language.

        Args:
            document_id: Stable identifier used as the cache key
            html: Raw HTML content

        Returns:
            Translated HTML, chunk results joined with newlines in chunk order

        Raises:
            MissingCredentialError, TransportError, APIError, MalformedResponseError
        """
        cached = self.cache.lookup_translation(document_id)
        if cached is not None:
            logger.info(f"Translation cache hit: {document_id}")
            return cached

        with self._in_flight.hold(("translation", document_id)):
            # Another caller may have finished while we waited on the guard
            cached = self.cache.lookup_translation(document_id)
            if cached is not None:
                logger.info(f"Translation cache hit after wait: {document_id}")
                return cached

            logger.info(f"Translation cache miss: {document_id}")
            self._require_credential()

            sanitized = self.sanitizer.sanitize(html)
            chunks = self.chunker.split(sanitized)
            prompt = TRANSLATION_PROMPT.format(language=self.settings.target_language)
            options = self.settings.translation_options()

            translated_parts = []
            for chunk in chunks:
                logger.debug(
                    f"Translating chunk {chunk.index + 1}/{len(chunks)} "
                    f"({chunk.length} chars) of {document_id}"
                )
                try:
                    translated_parts.append(self._call(prompt, chunk.content, options))
                except TranslationError as e:
                    e.details["document_id"] = document_id
                    e.details["chunk_index"] = chunk.index
                    e.details["chunk_count"] = len(chunks)
                    logger.error(
                        f"Translation of {document_id} failed at chunk "
                        f"{chunk.index + 1}/{len(chunks)}: {e.message}"
                    )
                    raise

            translated = "\n".join(translated_parts)
            self.cache.store_translation(document_id, translated)

            logger.info(f"Translated {document_id}: {len(chunks)} chunk(s), {len(translated)} chars")
            return translated

    def summarize(self, document_id: str, html: str) -> str:
        """
        Summarize an HTML document in one request (no chunking).

        Args:
            document_id: Stable identifier used as the cache key
            html: Raw HTML content

        Returns:
            Summary as an HTML fragment

        Raises:
            MissingCredentialError, TransportError, APIError, MalformedResponseError
        """
        cached = self.cache.lookup_summary(document_id)
        if cached is not None:
            logger.info(f"Summary cache hit: {document_id}")
            return cached

        with self._in_flight.hold(("summary", document_id)):
            cached = self.cache.lookup_summary(document_id)
            if cached is not None:
                logger.info(f"Summary cache hit after wait: {document_id}")
                return cached

            logger.info(f"Summary cache miss: {document_id}")
            self._require_credential()

            sanitized = self.sanitizer.sanitize(html)
            prompt = SUMMARY_PROMPT.format(
                language=self.settings.target_language,
                max_characters=self.settings.summary_max_characters
            )

            try:
                summary = self._call(prompt, sanitized, self.settings.summary_options())
            except TranslationError as e:
                e.details["document_id"] = document_id
                logger.error(f"Summary of {document_id} failed: {e.message}")
                raise

            self.cache.store_summary(document_id, summary)

            logger.info(f"Summarized {document_id}: {len(summary)} chars")
            return summary

    def _require_credential(self) -> None:
        # Checked before sanitizing so a missing key costs nothing
        if not self.credentials.has_api_key:
            logger.warning("No API key configured; request not sent")
            raise MissingCredentialError()

    def _call(self, prompt: str, content: str, options: CompletionOptions) -> str:
        return self.llm_client.complete(
            system_prompt=prompt,
            content=content,
            max_tokens=options.max_tokens,
            temperature=options.temperature,
            timeout=options.timeout
        )
