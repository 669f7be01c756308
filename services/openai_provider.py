# services/openai_provider.py
"""
OpenAI backend: chat completions, embeddings and text-to-speech.
"""

from typing import List

from openai import OpenAI

from services.ai_provider import AIProvider
from utils.logger import get_logger

logger = get_logger("OpenAIProvider")

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_EMBED_MODEL = "text-embedding-3-small"
DEFAULT_TTS_MODEL = "gpt-4o-mini-tts"
DEFAULT_TTS_VOICE = "alloy"


class OpenAIProvider(AIProvider):
    name = "openai"

    def __init__(
        self,
        api_key: str = None,
        model: str = None,
        embed_model: str = None,
        tts_model: str = DEFAULT_TTS_MODEL,
        tts_voice: str = DEFAULT_TTS_VOICE,
        client=None,
        **kwargs
    ):
        super().__init__(
            model=model or DEFAULT_MODEL,
            embed_model=embed_model or DEFAULT_EMBED_MODEL,
            **kwargs
        )
        self.tts_model = tts_model
        self.tts_voice = tts_voice

        if client is not None:
            self.client = client
            return

        if not api_key:
            raise ValueError("Missing OPENAI_API_KEY")

        try:
            self.client = OpenAI(api_key=api_key)
            logger.info(f"OpenAI client initialized {self.model}")
        except Exception as e:
            raise RuntimeError(f"Failed to init client {e}")

    def _complete(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "user", "content": prompt}
            ],
            temperature=self.temperature,
        )
        return response.choices[0].message.content

    def _embed(self, text: str) -> List[float]:
        response = self.client.embeddings.create(model=self.embed_model, input=text)
        if not response.data:
            return []
        return response.data[0].embedding

    def _synthesize(self, text: str) -> bytes:
        response = self.client.audio.speech.create(
            model=self.tts_model,
            voice=self.tts_voice,
            input=text,
            response_format="mp3",
        )
        return response.content
