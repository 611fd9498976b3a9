"""Spreadsheet formula handlers.

Handlers convert between formula arguments/return values and service
calls. They are the only place a failed result is turned into a raised
error, which the host shows as a formula error in the calling cell(s).
"""

import logging
from typing import Any

from sheet_completions.config import Settings, get_redis_client, settings
from sheet_completions.errors import ConfigurationError, TransportError
from sheet_completions.protocols import CredentialStore, Transport
from sheet_completions.repositories import DotenvCredentialStore, HttpxTransport, RedisCacheStore
from sheet_completions.services import BatchShapeMapper, CompletionService, select_cache_store
from sheet_completions.services.request_builder import clean_value, coerce_max_tokens, coerce_temperature

logger = logging.getLogger(__name__)

# Name of the credential entry in the user's property store (not the key itself)
API_KEY_PROPERTY = "OPENAI_API_KEY"

NO_MODELS = "No models available"
KEY_REMOVED = "API key removed from user settings."
KEY_SAVED = "API key saved successfully."
KEY_INVALID = "API key is invalid or failed to connect."


class SheetFunctions:
    """Formula entry points bound to default models and parameters.

    Example:
        ```python
        functions = SheetFunctions.create()

        functions.chatgpt("What is the average height of a giraffe?")
        functions.chatgpt4([["positive or negative: great!"], ["positive or negative: awful"]])
        ```
    """

    def __init__(
        self,
        service: CompletionService,
        credentials: CredentialStore,
        mapper: BatchShapeMapper | None = None,
    ) -> None:
        """Initialize the formula handlers.

        Args:
            service: Single-cell completion pipeline (required).
            credentials: Per-user credential store (required).
            mapper: Shape mapper. Defaults to BatchShapeMapper().
        """
        self._service = service
        self._credentials = credentials
        self._mapper = mapper or BatchShapeMapper()

    @classmethod
    def create(
        cls,
        config: Settings | None = None,
        transport: Transport | None = None,
        credentials: CredentialStore | None = None,
    ) -> "SheetFunctions":
        """Wire the default stack: httpx transport, Redis cache scopes, dotenv credentials.

        Cache scopes are tried most specific first: the current document,
        the shared scope, then the current user.
        """
        config = config or settings
        store = None
        if config.caching_enabled:
            client = get_redis_client(config)
            document_scope = (
                RedisCacheStore.create(f"document:{config.document_id}", config, client)
                if config.document_id
                else None
            )
            user_scope = RedisCacheStore.create(f"user:{config.user_id}", config, client) if config.user_id else None
            store = select_cache_store(
                document_scope,
                RedisCacheStore.create("shared", config, client),
                user_scope,
            )

        service = CompletionService.create(
            transport=transport or HttpxTransport.create(config),
            cache_store=store,
            settings=config,
        )
        return cls(service=service, credentials=credentials or DotenvCredentialStore.create(config))

    def _api_key(self) -> str:
        """Resolve the caller's API key.

        Raises:
            ConfigurationError: If neither the store nor settings hold a key
        """
        api_key = self._credentials.get(API_KEY_PROPERTY) or self._service.settings.openai_api_key
        if not api_key:
            raise ConfigurationError()
        return api_key

    def chatgpt(
        self,
        prompt: Any,
        model: str | None = None,
        max_tokens: int | float | None = None,
        temperature: float | None = None,
    ) -> str | list[list[str]]:
        """=CHATGPT(prompt, [model], [max_tokens], [temperature])

        Args:
            prompt: A cell value or a rectangular range
            model: Model to use. Defaults to the low-cost default model.
            max_tokens: Maximum tokens to return. Defaults to settings (short answers).
            temperature: Randomness; lower is more deterministic. Defaults to settings.

        Returns:
            Text for a single cell, or a grid of texts matching the range

        Raises:
            ConfigurationError: If no API key is set
            TransportError: If any cell's request fails; the whole range fails
            ValueError: If max_tokens or temperature are invalid, before any cell runs
        """
        api_key = self._api_key()
        config = self._service.settings
        model = clean_value(model) or config.default_model
        max_tokens = coerce_max_tokens(config.default_max_tokens if max_tokens is None else max_tokens)
        temperature = coerce_temperature(config.default_temperature if temperature is None else temperature)

        outcome = self._mapper.run(
            prompt,
            lambda cell: self._service.complete(cell, api_key, model, max_tokens, temperature),
        )
        return outcome.unwrap()

    def chatgpt3(
        self,
        prompt: Any,
        max_tokens: int | float | None = None,
        temperature: float | None = None,
    ) -> str | list[list[str]]:
        """=CHATGPT3(prompt, [max_tokens], [temperature]) - the default, most cost-effective model."""
        return self.chatgpt(prompt, self._service.settings.default_model, max_tokens, temperature)

    def chatgpt4(
        self,
        prompt: Any,
        max_tokens: int | float | None = None,
        temperature: float | None = None,
    ) -> str | list[list[str]]:
        """=CHATGPT4(prompt, [max_tokens], [temperature]) - the more capable model."""
        return self.chatgpt(prompt, self._service.settings.premium_model, max_tokens, temperature)

    def chatgpt_models(self) -> list[list[str]]:
        """=CHATGPTMODELS() - one model identifier per row, never cached."""
        model_ids = self._service.list_models(self._api_key())
        if not model_ids:
            return [[NO_MODELS]]
        return [[model_id] for model_id in model_ids]

    def chatgpt_key(self, api_key: Any) -> str:
        """=CHATGPTKEY(api_key) - store the key, or clear it with empty text.

        The key is checked against the models listing; a rejected key stays
        stored but is reported as invalid.
        """
        api_key = clean_value(api_key)
        if not api_key:
            self._credentials.delete(API_KEY_PROPERTY)
            return KEY_REMOVED

        self._credentials.set(API_KEY_PROPERTY, api_key)
        try:
            model_ids = self._service.list_models(api_key)
        except TransportError as e:
            logger.warning("API key check failed: %s", e)
            return KEY_INVALID

        if not model_ids:
            return KEY_INVALID
        return KEY_SAVED

    @property
    def service(self) -> CompletionService:
        """Get the underlying service (for testing)."""
        return self._service
