"""
HTML Translator

Translates and summarizes HTML documents through an OpenAI-compatible
chat-completion API, splitting large documents at block boundaries.
- Sanitizer: strips cosmetic attributes, collapses whitespace
- Chunker: block-boundary-safe splitting under a length budget
- LLMClient: one chat-completion request per call, typed failures
- ResultCache: per-document memoization of finished results

Public API surface:
  Orchestrator     — Translator
  Pipeline stages  — Sanitizer, Chunker, OpenAIChatClient
  Data models      — Settings, Chunk, CompletionOptions
  Error types      — TranslationError and its four subclasses
  Credentials      — InMemoryCredentialStore, EnvCredentialStore
"""

# --- Orchestrator ---
from .translator import Translator

# --- Pipeline stages ---
from .sanitizer import Sanitizer, sanitize
from .chunker import Chunker, chunk_html
from .llm_client import BaseLLMClient, OpenAIChatClient
from .result_cache import ResultCache

# --- Configuration and data models ---
from .schemas import Settings, Chunk, CompletionOptions
from .config import load_settings
from .credentials import CredentialStore, InMemoryCredentialStore, EnvCredentialStore

# --- Exceptions (callers should catch TranslationError) ---
from .exceptions import (
    TranslationError,
    MissingCredentialError,
    TransportError,
    APIError,
    MalformedResponseError,
)

__version__ = "0.1.0"
__all__ = [
    "Translator",
    "Sanitizer",
    "sanitize",
    "Chunker",
    "chunk_html",
    "BaseLLMClient",
    "OpenAIChatClient",
    "ResultCache",
    "Settings",
    "Chunk",
    "CompletionOptions",
    "load_settings",
    "CredentialStore",
    "InMemoryCredentialStore",
    "EnvCredentialStore",
    "TranslationError",
    "MissingCredentialError",
    "TransportError",
    "APIError",
    "MalformedResponseError",
]
