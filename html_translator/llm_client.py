"""
Chat-completion client for an OpenAI-compatible endpoint.

BaseLLMClient is the seam the Translator depends on, so tests and other
backends can stand in for the network. OpenAIChatClient issues exactly one
POST /chat/completions per call through the openai SDK and maps every SDK
failure onto the translator's own exception types.

No retries (max_retries=0) and no streaming: each call is atomic and blocking.
"""

from abc import ABC, abstractmethod
from typing import Optional

import httpx
import openai
from openai import OpenAI

from .schemas import Settings
from .credentials import CredentialStore, EnvCredentialStore
from .exceptions import (
    APIError,
    MalformedResponseError,
    MissingCredentialError,
    TransportError,
)
from .logger import get_module_logger

logger = get_module_logger("llm_client")


class BaseLLMClient(ABC):
    """Abstract base class for chat-completion clients."""

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        content: str,
        max_tokens: int,
        temperature: float,
        timeout: float
    ) -> str:
        """
        Send one system+user exchange and return the reply text.

        Args:
            system_prompt: Instruction message
            content: User message (an HTML chunk or document)
            max_tokens: Completion token budget
            temperature: Sampling temperature
            timeout: Request timeout in seconds

        Returns:
            The first choice's message content, stripped of surrounding whitespace

        Raises:
            MissingCredentialError, TransportError, APIError, MalformedResponseError
        """
        pass


class OpenAIChatClient(BaseLLMClient):
    """Client for any endpoint speaking the OpenAI chat-completion protocol."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        credentials: Optional[CredentialStore] = None,
        http_client: Optional[httpx.Client] = None
    ):
        self.settings = settings or Settings()
        self.credentials = credentials or EnvCredentialStore()
        # Injected transport (tests pass an httpx.MockTransport-backed client)
        self.http_client = http_client

        self._client: Optional[OpenAI] = None
        self._client_key: Optional[str] = None

    def _get_client(self, api_key: str) -> OpenAI:
        # The key is re-read on every call; rebuild the SDK client only when
        # it has changed since the last request.
        if self._client is None or self._client_key != api_key:
            # An injected http_client belongs to the caller; only close pools
            # the SDK created for us.
            if self._client is not None and self.http_client is None:
                self._client.close()
            self._client = OpenAI(
                api_key=api_key,
                base_url=self.settings.api_url,
                max_retries=0,
                http_client=self.http_client
            )
            self._client_key = api_key
        return self._client

    def complete(
        self,
        system_prompt: str,
        content: str,
        max_tokens: int,
        temperature: float,
        timeout: float
    ) -> str:
        """Send one request to the chat-completion endpoint."""
        api_key = self.credentials.api_key
        if not api_key:
            raise MissingCredentialError()

        client = self._get_client(api_key)
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": content}
        ]

        logger.debug(
            f"POST chat completion: model={self.settings.model}, "
            f"{len(content)} chars, max_tokens={max_tokens}, timeout={timeout}s"
        )

        try:
            # Raw response: the SDK accepts any 2xx, the endpoint contract is 200 only
            raw = client.chat.completions.with_raw_response.create(
                model=self.settings.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                stream=False,
                timeout=timeout
            )
        except openai.APIStatusError as e:
            body = e.response.text
            logger.error(f"Chat completion failed with status {e.status_code}: {body}")
            raise APIError(
                e.status_code,
                body,
                details={"model": self.settings.model}
            ) from e
        except openai.APIConnectionError as e:
            # APITimeoutError is a subclass, so timeouts land here too
            reason = f"{e.message} ({e.__cause__})" if e.__cause__ else e.message
            logger.error(f"Chat completion transport failure: {reason}")
            raise TransportError(
                reason,
                cause=e,
                details={"api_url": self.settings.api_url}
            ) from e

        status_code = raw.http_response.status_code
        if status_code != 200:
            body = raw.http_response.text
            logger.error(f"Chat completion answered with status {status_code}: {body}")
            raise APIError(
                status_code,
                body,
                details={"model": self.settings.model}
            )

        try:
            response = raw.parse()
        except (openai.APIResponseValidationError, ValueError) as e:
            # ValueError covers a JSON content-type whose body does not decode
            logger.error(f"Chat completion response could not be parsed: {e}")
            raise MalformedResponseError(
                f"Response could not be parsed: {e}"
            ) from e

        return self._extract_content(response)

    @staticmethod
    def _extract_content(response) -> str:
        """
        Pull choices[0].message.content out of a parsed response.

        The SDK builds response models without validation, so any of these
        attributes may be missing, None, or of the wrong type. A non-JSON 200
        body comes back as a plain string.
        """
        choices = getattr(response, "choices", None)
        if not isinstance(choices, list) or not choices:
            raise MalformedResponseError("Response has no choices")

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            raise MalformedResponseError(
                "Response choice has no message content",
                details={"choice": repr(choices[0])}
            )

        return content.strip()
