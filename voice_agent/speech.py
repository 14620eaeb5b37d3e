"""Speech I/O — OpenAI Whisper transcription and TTS synthesis."""
import io
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from openai import AsyncOpenAI

from .config import settings

logger = logging.getLogger(__name__)

_client: Optional[AsyncOpenAI] = None


def _get_client() -> AsyncOpenAI:
    """Lazily create the shared client so importing this module needs no API key."""
    global _client
    if _client is None:
        _client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
        )
    return _client


@dataclass
class VoiceOutput:
    text: str
    audio: Optional[bytes] = None


async def transcribe(audio_bytes: bytes, filename: str = "audio.webm") -> str:
    """Transcribe an audio clip with Whisper. The filename extension tells the API the format."""
    audio_file = io.BytesIO(audio_bytes)
    audio_file.name = filename
    logger.info(f"ASR: sending {len(audio_bytes)} bytes ({filename}) to {settings.openai_asr_model}")

    transcript = await _get_client().audio.transcriptions.create(
        model=settings.openai_asr_model,
        file=audio_file,
        language=settings.asr_language,
    )
    text = transcript.text.strip()
    logger.info(f"ASR result: {text}")
    return text


async def synthesize(text: str) -> bytes:
    """Synthesize speech for text; returns MP3 bytes."""
    logger.info(f"TTS: synthesizing '{text[:50]}...' with {settings.openai_tts_model}/{settings.openai_tts_voice}")
    response = await _get_client().audio.speech.create(
        model=settings.openai_tts_model,
        voice=settings.openai_tts_voice,
        input=text,
        response_format="mp3",
    )
    audio = response.content
    logger.info(f"TTS: received {len(audio)} bytes")
    return audio


async def voice_interaction(audio_bytes: bytes, handler: Callable[[str], Awaitable[str]],
                            filename: str = "audio.webm", speak: bool = True) -> VoiceOutput:
    """Transcribe, hand the text to handler, and speak its reply unless speak is False."""
    user_text = await transcribe(audio_bytes, filename=filename)
    logger.info(f'User said: "{user_text}"')

    reply = await handler(user_text)
    logger.info(f'Agent response: "{reply}"')

    if not speak:
        return VoiceOutput(text=reply)
    return VoiceOutput(text=reply, audio=await synthesize(reply))
