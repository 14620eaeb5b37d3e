"""Tests for speech.py — Whisper transcription, TTS, and the voice round trip."""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from voice_agent.speech import synthesize, transcribe, voice_interaction


def _mock_client(text="send an email to Bob", audio=b"ID3mp3"):
    client = MagicMock()
    client.audio.transcriptions.create = AsyncMock(return_value=MagicMock(text=f"  {text}  "))
    client.audio.speech.create = AsyncMock(return_value=MagicMock(content=audio))
    return client


class TestTranscribe:
    @pytest.mark.asyncio
    async def test_returns_stripped_text(self):
        client = _mock_client()
        with patch("voice_agent.speech._get_client", return_value=client):
            text = await transcribe(b"\x00" * 100, filename="clip.wav")
        assert text == "send an email to Bob"

    @pytest.mark.asyncio
    async def test_passes_model_and_filename(self):
        client = _mock_client()
        with patch("voice_agent.speech._get_client", return_value=client):
            await transcribe(b"abc", filename="clip.webm")
        kwargs = client.audio.transcriptions.create.call_args.kwargs
        assert kwargs["model"] == "whisper-1"
        assert kwargs["file"].name == "clip.webm"
        assert kwargs["language"] == "en"


class TestSynthesize:
    @pytest.mark.asyncio
    async def test_returns_audio_bytes(self):
        client = _mock_client(audio=b"mp3-bytes")
        with patch("voice_agent.speech._get_client", return_value=client):
            audio = await synthesize("Done!")
        assert audio == b"mp3-bytes"
        kwargs = client.audio.speech.create.call_args.kwargs
        assert kwargs["voice"] == "alloy"
        assert kwargs["input"] == "Done!"


class TestVoiceInteraction:
    @pytest.mark.asyncio
    async def test_round_trip(self):
        client = _mock_client(text="post to slack", audio=b"reply")
        handler = AsyncMock(return_value="Posting to Slack")
        with patch("voice_agent.speech._get_client", return_value=client):
            out = await voice_interaction(b"pcm", handler)
        handler.assert_awaited_once_with("post to slack")
        assert out.text == "Posting to Slack"
        assert out.audio == b"reply"

    @pytest.mark.asyncio
    async def test_transcription_error_propagates(self):
        client = _mock_client()
        client.audio.transcriptions.create.side_effect = RuntimeError("bad audio")
        with patch("voice_agent.speech._get_client", return_value=client):
            with pytest.raises(RuntimeError):
                await voice_interaction(b"pcm", AsyncMock())
