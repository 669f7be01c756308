# services/providers.py
"""
Builds the configured AIProvider.
"""

from config import Config
from services.ai_provider import AIProvider
from services.mistral_provider import MistralProvider
from services.openai_provider import OpenAIProvider
from utils.logger import get_logger

logger = get_logger("Providers")


def create_provider(config=Config) -> AIProvider:
    """Instantiate the provider named by ``config.AI_PROVIDER``."""
    common = {
        "model": config.LLM_MODEL or None,
        "embed_model": config.EMBED_MODEL or None,
        "temperature": config.LLM_TEMPERATURE,
        "max_retries": config.LLM_MAX_RETRIES,
        "max_requests_per_minute": config.MAX_REQUESTS_PER_MINUTE,
    }

    if config.AI_PROVIDER == "mistral":
        provider = MistralProvider(api_key=config.MISTRAL_API_KEY, **common)
    elif config.AI_PROVIDER == "openai":
        provider = OpenAIProvider(
            api_key=config.OPENAI_API_KEY,
            tts_model=config.TTS_MODEL,
            tts_voice=config.TTS_VOICE,
            **common
        )
    else:
        raise ValueError(f"Unknown AI_PROVIDER: {config.AI_PROVIDER}")

    logger.info(f"Using AI provider: {provider.describe()}")
    return provider
