"""Runtime settings: agent address, OpenAI speech models, tool executor."""
from pydantic import BaseModel
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def _load_dotenv(path: Path) -> None:
    """Copy KEY=VALUE lines from path into os.environ; real env vars win."""
    if not path.exists():
        return
    with open(path) as f:
        for raw in f:
            entry = raw.strip()
            if not entry or entry.startswith("#") or "=" not in entry:
                continue
            key, _, value = entry.partition("=")
            os.environ.setdefault(key.strip(), value.strip())


_load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _sanitize_ascii(val: str) -> str:
    """API keys and model names pasted from docs sometimes carry non-ASCII junk."""
    return val.encode('ascii', errors='ignore').decode('ascii').strip()


class Settings(BaseModel):
    # Agent API
    agent_host: str = os.getenv("AGENT_API_HOST", "localhost")
    agent_port: int = int(os.getenv("AGENT_API_PORT", "3000"))

    # OpenAI API for ASR/TTS
    openai_api_key: str = _sanitize_ascii(os.getenv("OPENAI_API_KEY", ""))
    openai_base_url: str = _sanitize_ascii(os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"))
    openai_asr_model: str = _sanitize_ascii(os.getenv("OPENAI_ASR_MODEL", "whisper-1"))
    openai_tts_model: str = _sanitize_ascii(os.getenv("OPENAI_TTS_MODEL", "tts-1"))
    openai_tts_voice: str = _sanitize_ascii(os.getenv("OPENAI_TTS_VOICE", "alloy"))
    asr_language: str = _sanitize_ascii(os.getenv("ASR_LANGUAGE", "en"))

    # Tool execution: "mock" runs the builtin stubs, "remote" forwards to a tool server
    executor: str = _sanitize_ascii(os.getenv("TOOL_EXECUTOR", "mock")).lower()
    tool_server_url: str = _sanitize_ascii(os.getenv("TOOL_SERVER_URL", "http://localhost:3001"))
    tool_timeout_s: float = float(os.getenv("TOOL_TIMEOUT", "30"))
    mock_delay_s: float = float(os.getenv("MOCK_TOOL_DELAY", "0.1"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def agent_url(self) -> str:
        return f"http://{self.agent_host}:{self.agent_port}"


settings = Settings()

_oai_key = '***' + settings.openai_api_key[-4:] if len(settings.openai_api_key) > 4 else 'EMPTY'
logger.info(f"Config: ASR/TTS → {settings.openai_base_url} (key={_oai_key})")
logger.info(f"Config: executor={settings.executor}, tool server={settings.tool_server_url}")
