"""
Pydantic schemas shared by the pipeline stages.

Settings:          Process-wide configuration (endpoint, model, budgets)
CompletionOptions: Per-request knobs handed from the Translator to the LLM client
Chunk:             One boundary-safe HTML fragment produced by the Chunker

Data flow through the pipeline:
  Sanitizer → str → Chunker → list[Chunk] → LLMClient (one call per Chunk)
"""

from pydantic import BaseModel, Field


DEFAULT_API_URL = "https://api.siliconflow.cn/v1"
DEFAULT_MODEL = "deepseek-ai/DeepSeek-V3.2"


class Chunk(BaseModel):
    """A contiguous slice of sanitized HTML, cut only at a block start tag."""
    index: int = Field(ge=0, description="Position of the chunk in the document")
    content: str

    @property
    def length(self) -> int:
        return len(self.content)


class CompletionOptions(BaseModel):
    """Knobs for a single chat-completion request."""
    max_tokens: int = Field(gt=0)
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    timeout: float = Field(gt=0, description="Request timeout in seconds")


class Settings(BaseModel):
    """Translator configuration. See config.load_settings() for env overrides."""
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    target_language: str = "Chinese"

    # Chunker budget, in characters of sanitized HTML
    max_chunk_length: int = Field(default=3000, gt=0)
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    # Translation gets a large budget: a chunk can expand when translated
    translation_max_tokens: int = Field(default=16384, gt=0)
    translation_timeout: float = Field(default=180.0, gt=0)

    summary_max_tokens: int = Field(default=2048, gt=0)
    summary_timeout: float = Field(default=60.0, gt=0)
    summary_max_characters: int = Field(default=200, gt=0)

    def translation_options(self) -> CompletionOptions:
        return CompletionOptions(
            max_tokens=self.translation_max_tokens,
            temperature=self.temperature,
            timeout=self.translation_timeout
        )

    def summary_options(self) -> CompletionOptions:
        return CompletionOptions(
            max_tokens=self.summary_max_tokens,
            temperature=self.temperature,
            timeout=self.summary_timeout
        )
