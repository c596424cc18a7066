# src/llm/client_factory.py — v1
"""Factory: instantiate the response-generation LLM client from settings."""

from __future__ import annotations

import importlib
import logging

from voxrelay.config.settings import Settings
from voxrelay.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

# Registry of provider name → adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "openai": "voxrelay.llm.adapters.openai_adapter.OpenAIAdapter",
    "anthropic": "voxrelay.llm.adapters.anthropic_adapter.AnthropicAdapter",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_llm_client(
    provider: str,
    model: str,
    settings: Settings | None = None,
    **kwargs: object,
) -> BaseLLMClient:
    """Instantiate the adapter registered for ``provider``.

    Args:
        provider: Provider identifier (openai, anthropic, or a registered name).
        model: Model name.
        settings: Application settings (API keys, base URL).
        **kwargs: Extra adapter arguments; explicit values win over settings.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    adapter_cls = _import_class(_PROVIDER_REGISTRY[provider])

    init_kwargs = dict(kwargs)
    init_kwargs["model"] = model
    if settings is not None:
        if provider == "openai":
            init_kwargs.setdefault("api_key", settings.openai_api_key)
            if settings.llm_base_url:
                init_kwargs.setdefault("base_url", settings.llm_base_url)
        elif provider == "anthropic":
            init_kwargs.setdefault("api_key", settings.anthropic_api_key)

    logger.debug("Creating LLM client: provider=%s, model=%s", provider, model)
    return adapter_cls(**init_kwargs)


def create_llm_client_from_settings(settings: Settings) -> BaseLLMClient:
    """Client for the response-generation stage (``LLM_PROVIDER`` / ``LLM_MODEL``)."""
    return create_llm_client(settings.llm_provider, settings.llm_model, settings=settings)


def register_provider(name: str, class_path: str) -> None:
    """Register a custom provider adapter by fully qualified class path."""
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered LLM provider: %s → %s", name, class_path)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
