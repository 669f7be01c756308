# services/mistral_provider.py
"""
Mistral AI backend using the mistralai SDK.
"""

from typing import List

from mistralai import Mistral

from services.ai_provider import AIProvider
from services.errors import SpeechUnavailableError
from utils.logger import get_logger

logger = get_logger("MistralProvider")

DEFAULT_MODEL = "mistral-small-latest"
DEFAULT_EMBED_MODEL = "mistral-embed"


class MistralProvider(AIProvider):
    name = "mistral"

    def __init__(
        self,
        api_key: str = None,
        model: str = None,
        embed_model: str = None,
        client=None,
        **kwargs
    ):
        super().__init__(
            model=model or DEFAULT_MODEL,
            embed_model=embed_model or DEFAULT_EMBED_MODEL,
            **kwargs
        )

        if client is not None:
            self.client = client
            return

        if not api_key:
            raise ValueError("Missing MISTRAL_API_KEY")

        try:
            self.client = Mistral(api_key=api_key)
            logger.info(f"Mistral client initialized {self.model}")
        except Exception as e:
            raise RuntimeError(f"Failed to init client {e}")

    def _complete(self, prompt: str) -> str:
        response = self.client.chat.complete(
            model=self.model,
            messages=[
                {"role": "user", "content": prompt}
            ],
            temperature=self.temperature,
        )
        return response.choices[0].message.content

    def _embed(self, text: str) -> List[float]:
        response = self.client.embeddings.create(
            model=self.embed_model,
            inputs=[text],
        )
        if not response.data:
            return []
        return response.data[0].embedding

    def _synthesize(self, text: str) -> bytes:
        raise SpeechUnavailableError("Mistral has no text-to-speech endpoint; set AI_PROVIDER=openai for audio")
