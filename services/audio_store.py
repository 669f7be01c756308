# services/audio_store.py
"""
Writes synthesized report audio to the reports directory.
"""

import os
import time
from typing import Dict

from config import Config
from services.ai_provider import AIProvider
from utils.logger import get_logger

logger = get_logger("AudioStore")

PUBLIC_PREFIX = "/reports"


def save_audio(audio: bytes, output_dir: str = None) -> Dict[str, str]:
    output_dir = output_dir or Config.REPORTS_DIR
    os.makedirs(output_dir, exist_ok=True)

    filename = f"report_{int(time.time() * 1000)}.mp3"
    filepath = os.path.join(output_dir, filename)

    with open(filepath, "wb") as f:
        f.write(audio)

    logger.info(f"Audio file created: {filepath}")
    return {
        "filename": filename,
        "filepath": filepath,
        "url": f"{PUBLIC_PREFIX}/{filename}",
    }


def generate_audio(provider: AIProvider, text: str, output_dir: str = None) -> Dict[str, str]:
    """Synthesize ``text`` and store it as an MP3 file."""
    return save_audio(provider.synthesize_speech(text), output_dir)
