"""Single-cell completion pipeline.

This service orchestrates one request: cleaning the prompt, deriving the
cache key, consulting the request cache, and calling the completion API
through the transport on a miss.
"""

import logging

from pydantic import ValidationError

from sheet_completions.config import Settings, settings
from sheet_completions.dto import ChatCompletionRequest, ChatCompletionResponse, ModelsPage
from sheet_completions.entities import CompletionResult, NormalizedRequest
from sheet_completions.errors import CompletionError, TransportError
from sheet_completions.protocols import CacheStore, Transport
from sheet_completions.services.cache_keys import derive_cache_key
from sheet_completions.services.request_builder import build_request
from sheet_completions.services.request_cache import RequestCache

logger = logging.getLogger(__name__)

MIME_JSON = "application/json"


class CompletionService:
    """Core completion orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - Transport: httpx, a host fetch API, or a scripted fake
    - CacheStore: Redis, in-memory, or a host cache scope

    Example:
        ```python
        from sheet_completions.services import CompletionService

        service = CompletionService.create(
            settings=Settings(cache_duration=3600),
            transport=HttpxTransport.create(),
            cache_store=InMemoryCacheStore(),
        )
        result = service.complete("Capital of France?", api_key="sk-...")
        ```
    """

    def __init__(
        self,
        settings: Settings,
        transport: Transport,
        cache: RequestCache,
    ) -> None:
        """Initialize the completion service.

        Args:
            settings: Immutable configuration (defaults, system prompt, endpoint).
            transport: HTTP transport for outbound calls (required).
            cache: Request cache wrapping the selected store (required).
        """
        self._settings = settings
        self._transport = transport
        self._cache = cache

    @classmethod
    def create(
        cls,
        transport: Transport,
        cache_store: CacheStore | None,
        settings: Settings = settings,
    ) -> "CompletionService":
        """Factory method building the RequestCache from settings.

        Args:
            transport: HTTP transport (required).
            cache_store: Selected cache scope, or None to disable caching.
            settings: Configuration. Defaults to the environment settings.

        Returns:
            Configured CompletionService instance
        """
        return cls(
            settings=settings,
            transport=transport,
            cache=RequestCache(cache_store, settings.cache_duration),
        )

    def cache_key(self, request: NormalizedRequest) -> str:
        """Derive the cache key for a normalized request."""
        return derive_cache_key(
            request.prompt,
            request.model,
            request.max_tokens,
            request.temperature,
            system_prompt=request.system_prompt if self._settings.cache_key_includes_system_prompt else None,
        )

    def complete(
        self,
        prompt: object,
        api_key: str,
        model: str | None = None,
        max_tokens: object = None,
        temperature: object = None,
    ) -> CompletionResult:
        """Run the pipeline for a single cell.

        Business logic:
        1. Clean the prompt, short-circuit to EMPTY if nothing is left
        2. Look up the cache by request digest
        3. On a miss, call the completion API
        4. Store non-empty text, return EMPTY for empty upstream content

        Args:
            prompt: Raw cell value
            api_key: Bearer token for the API
            model: Model identifier. Defaults to settings.
            max_tokens: Maximum generated tokens. Defaults to settings.
            temperature: Sampling temperature. Defaults to settings.

        Returns:
            CompletionResult; transport failures come back as a failed
            result rather than being raised

        Raises:
            ValueError: If max_tokens or temperature are invalid
        """
        request = build_request(
            prompt,
            self._settings.system_prompt,
            model or self._settings.default_model,
            self._settings.default_max_tokens if max_tokens is None else max_tokens,
            self._settings.default_temperature if temperature is None else temperature,
        )
        if request is None:
            return CompletionResult.empty()

        key = self.cache_key(request)
        cached = self._cache.get(key)
        if cached:
            return CompletionResult.of_text(cached)

        try:
            result = self._request_completion(request, api_key)
        except CompletionError as e:
            logger.error("Completion request failed for model %s: %s", request.model, e)
            return CompletionResult.failed(e)

        if result.is_cacheable:
            self._cache.put(key, result.text)
        else:
            logger.warning("Model %s returned no content, result not cached", request.model)
        return result

    def list_models(self, api_key: str) -> list[str]:
        """List model identifiers available to the API key. Never cached.

        Raises:
            TransportError: If the listing call fails
        """
        raw = self._transport.execute("GET", self._url("models"), self._headers(api_key), None)
        return self._decode(ModelsPage, raw).model_ids

    def _request_completion(self, request: NormalizedRequest, api_key: str) -> CompletionResult:
        payload = ChatCompletionRequest(
            model=request.model,
            max_tokens=request.max_tokens,
            messages=request.messages(),
            temperature=request.temperature,
            seed=self._settings.seed,
            user=self._settings.user_id,
        )
        logger.info("Requesting completion from %s (max_tokens=%d)", request.model, request.max_tokens)
        raw = self._transport.execute(
            "POST",
            self._url("chat/completions"),
            self._headers(api_key),
            payload.model_dump(exclude_none=True),
        )
        response = self._decode(ChatCompletionResponse, raw)
        return CompletionResult.of_text(response.content)

    def _url(self, path: str) -> str:
        return f"{self._settings.api_base_url.rstrip('/')}/{path}"

    @staticmethod
    def _headers(api_key: str) -> dict[str, str]:
        return {
            "Accept": MIME_JSON,
            "Content-Type": MIME_JSON,
            "Authorization": f"Bearer {api_key}",
        }

    @staticmethod
    def _decode(model, raw: str):
        try:
            return model.model_validate_json(raw)
        except ValidationError as e:
            raise TransportError(f"Malformed response from completion API: {e}") from e

    @property
    def settings(self) -> Settings:
        """Get the service configuration."""
        return self._settings

    @property
    def cache(self) -> RequestCache:
        """Get the underlying request cache (for testing)."""
        return self._cache
