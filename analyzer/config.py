"""
Runtime settings for the analyzer, read from the process environment.
"""
import math
import os
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from analyzer.errors import ConfigurationError, UnknownProviderError

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = 'groq'


@dataclass(frozen=True)
class Provider:
    """A chat-completion backend reachable through the OpenAI SDK."""
    name: str
    api_key_env: str
    model_env: str
    default_model: str
    base_url: Optional[str] = None


PROVIDERS: Dict[str, Provider] = {
    'groq': Provider(
        name='groq',
        api_key_env='GROQ_API_KEY',
        model_env='GROQ_MODEL',
        default_model='llama-3.3-70b-versatile',
        base_url='https://api.groq.com/openai/v1',
    ),
    'openai': Provider(
        name='openai',
        api_key_env='OPENAI_API_KEY',
        model_env='OPENAI_MODEL',
        default_model='gpt-4o-mini',
    ),
}


@dataclass(frozen=True)
class Settings:
    """Everything one analysis request needs to know about its backend."""
    provider: Provider
    api_key: Optional[str]
    model: str
    temperature: float = 0.2
    max_tokens: int = 3000
    json_mode: bool = True
    timeout: float = 60.0
    max_attempts: int = 1
    cache_ttl: int = 0
    enforce_rubric_label: bool = False

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def require_api_key(self) -> str:
        """
        Return the backend credential.

        Raises:
            ConfigurationError: If the credential is not set.
        """
        if not self.api_key:
            env_name = self.provider.api_key_env
            raise ConfigurationError(
                f"{env_name} not found!",
                f"Add {env_name} to the server environment or the .env file",
            )
        return self.api_key


def _env_str(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _env_float(name: str, default: float, positive: bool = False) -> float:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    if not math.isfinite(value) or (positive and value <= 0):
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    return value


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    if value < minimum:
        logger.warning(f"Ignoring {name}={value} below {minimum}, using {default}")
        return default
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = _env_str(name)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in ('1', 'true', 'yes', 'on'):
        return True
    if lowered in ('0', 'false', 'no', 'off'):
        return False
    logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
    return default


def get_provider(name: str) -> Provider:
    """
    Look up a provider by name.

    Raises:
        UnknownProviderError: If no provider has that name.
    """
    provider = PROVIDERS.get(name.strip().lower())
    if provider is None:
        raise UnknownProviderError(
            details=f"'{name}' is not one of: {', '.join(sorted(PROVIDERS))}"
        )
    return provider


def load_settings(provider_name: Optional[str] = None) -> Settings:
    """
    Build settings from the current environment.

    Called once per request so credential changes are picked up without a
    restart.

    Args:
        provider_name: Explicit provider (from the URL). Falls back to
            LLM_PROVIDER, then to the default provider.

    Raises:
        UnknownProviderError: If an explicit provider name is unknown.
        ConfigurationError: If LLM_PROVIDER names an unknown provider.
    """
    if provider_name is not None:
        provider = get_provider(provider_name)
    else:
        configured_name = _env_str('LLM_PROVIDER') or DEFAULT_PROVIDER
        try:
            provider = get_provider(configured_name)
        except UnknownProviderError:
            raise ConfigurationError(
                f"Unknown LLM_PROVIDER '{configured_name}'",
                f"Set LLM_PROVIDER to one of: {', '.join(sorted(PROVIDERS))}",
            )

    return Settings(
        provider=provider,
        api_key=_env_str(provider.api_key_env),
        model=_env_str(provider.model_env) or provider.default_model,
        temperature=_env_float('LLM_TEMPERATURE', 0.2),
        max_tokens=_env_int('LLM_MAX_TOKENS', 3000, minimum=1),
        json_mode=_env_bool('LLM_JSON_MODE', True),
        timeout=_env_float('LLM_TIMEOUT', 60.0, positive=True),
        max_attempts=_env_int('LLM_MAX_ATTEMPTS', 1, minimum=1),
        cache_ttl=_env_int('ANALYSIS_CACHE_TTL', 0),
        enforce_rubric_label=_env_bool('ENFORCE_RUBRIC_LABEL', False),
    )
