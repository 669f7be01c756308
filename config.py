"""
Centralized configuration management for the Progress Tracker API.
"""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration."""

    # AI Provider
    AI_PROVIDER: str = os.getenv("AI_PROVIDER", "mistral").lower()
    MISTRAL_API_KEY: str = os.getenv("MISTRAL_API_KEY", "")
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    LLM_MODEL: str = os.getenv("LLM_MODEL", "")
    EMBED_MODEL: str = os.getenv("EMBED_MODEL", "")
    TTS_MODEL: str = os.getenv("TTS_MODEL", "gpt-4o-mini-tts")
    TTS_VOICE: str = os.getenv("TTS_VOICE", "alloy")
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.3"))
    LLM_MAX_RETRIES: int = int(os.getenv("LLM_MAX_RETRIES", "3"))

    # Rate Limiting
    MAX_REQUESTS_PER_MINUTE: int = int(os.getenv("MAX_REQUESTS_PER_MINUTE", "50"))

    # MongoDB
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017/")
    MONGO_DB: str = os.getenv("MONGO_DB", "progress_tracker")
    MONGO_WORK_ENTRIES_COLLECTION: str = os.getenv("MONGO_WORK_ENTRIES_COLLECTION", "work_entries")
    MONGO_BUGS_COLLECTION: str = os.getenv("MONGO_BUGS_COLLECTION", "bugs")

    # Similarity search
    SIMILARITY_TOP_K: int = int(os.getenv("SIMILARITY_TOP_K", "3"))
    SIMILARITY_THRESHOLD: float = float(os.getenv("SIMILARITY_THRESHOLD", "0.3"))
    SIMILARITY_THRESHOLD_ENABLED: bool = os.getenv("SIMILARITY_THRESHOLD_ENABLED", "True").lower() == "true"

    # Paths
    REPORTS_DIR: str = os.getenv("REPORTS_DIR", "./reports")
    LOGS_DIR: str = os.getenv("LOGS_DIR", "./logs")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "3000"))
    API_RELOAD: bool = os.getenv("API_RELOAD", "False").lower() == "true"

    SUPPORTED_PROVIDERS = ("mistral", "openai")

    @classmethod
    def validate(cls):
        """Validate critical configuration."""
        errors = []

        if cls.AI_PROVIDER not in cls.SUPPORTED_PROVIDERS:
            errors.append(
                f"AI_PROVIDER must be one of {', '.join(cls.SUPPORTED_PROVIDERS)}"
            )

        if cls.AI_PROVIDER == "mistral" and not cls.MISTRAL_API_KEY:
            errors.append("MISTRAL_API_KEY is required when AI_PROVIDER=mistral")

        if cls.AI_PROVIDER == "openai" and not cls.OPENAI_API_KEY:
            errors.append("OPENAI_API_KEY is required when AI_PROVIDER=openai")

        if cls.SIMILARITY_TOP_K < 1:
            errors.append("SIMILARITY_TOP_K must be >= 1")

        if not -1.0 <= cls.SIMILARITY_THRESHOLD <= 1.0:
            errors.append("SIMILARITY_THRESHOLD must be between -1 and 1")

        if cls.LLM_MAX_RETRIES < 1:
            errors.append("LLM_MAX_RETRIES must be >= 1")

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

    @classmethod
    def get_search_config(cls) -> dict:
        """Get similarity search settings."""
        return {
            "top_k": cls.SIMILARITY_TOP_K,
            "threshold": cls.SIMILARITY_THRESHOLD if cls.SIMILARITY_THRESHOLD_ENABLED else None,
        }
