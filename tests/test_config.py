"""Tests for config.py — .env loading and value sanitising."""
import os

from voice_agent.config import Settings, _load_dotenv, _sanitize_ascii


class TestLoadDotenv:
    def test_sets_missing_keys(self, tmp_path, monkeypatch):
        monkeypatch.delenv("VA_TEST_KEY", raising=False)
        env = tmp_path / ".env"
        env.write_text("# comment\n\nVA_TEST_KEY = hello\nnot a pair\n")
        _load_dotenv(env)
        assert os.environ["VA_TEST_KEY"] == "hello"
        monkeypatch.delenv("VA_TEST_KEY")

    def test_environment_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("VA_TEST_KEY", "from-env")
        env = tmp_path / ".env"
        env.write_text("VA_TEST_KEY=from-file\n")
        _load_dotenv(env)
        assert os.environ["VA_TEST_KEY"] == "from-env"

    def test_missing_file_is_ignored(self, tmp_path):
        _load_dotenv(tmp_path / "absent.env")


class TestSettings:
    def test_sanitize_ascii(self):
        assert _sanitize_ascii(" sk-abc\u200b ") == "sk-abc"

    def test_agent_url(self):
        s = Settings(agent_host="127.0.0.1", agent_port=4000)
        assert s.agent_url == "http://127.0.0.1:4000"
