# services/errors.py
"""
Errors raised by AI providers.
"""


class ProviderError(Exception):
    """Base class for failures of a hosted AI provider."""


class AnalysisError(ProviderError):
    """Work entry analysis failed or returned unparseable JSON."""


class EmbeddingError(ProviderError):
    """The embedding model failed or returned no vector."""


class SolutionGenerationError(ProviderError):
    """Solution synthesis from similar bugs failed."""


class ReportGenerationError(ProviderError):
    """Report text generation failed."""


class SpeechError(ProviderError):
    """Text-to-speech synthesis failed."""


class SpeechUnavailableError(SpeechError):
    """The configured provider has no text-to-speech endpoint."""
