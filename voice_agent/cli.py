"""Command-line client for the agent API: single commands, a REPL, and recorded clips."""
from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator, Optional

import httpx
import openai
import typer
import uvicorn

from .config import settings

logger = logging.getLogger(__name__)

app = typer.Typer(help="Voice agent CLI: send spoken or typed commands to the agent API")

TEXT_SUFFIXES = {".txt"}

# Failures reported to the user instead of a traceback.
CLIENT_ERRORS = (httpx.HTTPError, openai.APIError)


def _setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _agent_url(host: str, port: int) -> str:
    return f"http://{host}:{port}"


@asynccontextmanager
async def agent_session(host: str, port: int) -> AsyncIterator[httpx.AsyncClient]:
    """Yield a client for the agent API, starting a local server if none answers /health."""
    server: Optional[uvicorn.Server] = None
    task: Optional[asyncio.Task] = None
    async with httpx.AsyncClient(base_url=_agent_url(host, port), timeout=30) as client:
        try:
            await client.get("/health")
            logger.info("Agent server is already running")
        except httpx.TransportError:
            logger.info("Starting local agent server...")
            server = uvicorn.Server(uvicorn.Config("voice_agent.api:app", host=host, port=port, log_level="warning"))
            task = asyncio.create_task(server.serve())
            while not server.started:
                if task.done():
                    task.result()
                    raise RuntimeError("Agent server exited during startup")
                await asyncio.sleep(0.05)
        try:
            yield client
        finally:
            if server is not None:
                server.should_exit = True
                await task


async def process_command(client: httpx.AsyncClient, text: str) -> str:
    resp = await client.post("/agent/run", json={
        "userInput": text,
        "context": {
            "source": "voice-cli",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    })
    resp.raise_for_status()
    return resp.json()["response"]


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8").strip()
    except UnicodeDecodeError:
        _fail(f"Transcript is not valid UTF-8: {path}")


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command()
def run(
    command: str = typer.Argument(..., help="Command text, e.g. 'send an email to Bob'"),
    host: str = typer.Option(settings.agent_host, help="Agent API host"),
    port: int = typer.Option(settings.agent_port, help="Agent API port"),
) -> None:
    """Process a single command."""
    _setup_logging()

    async def _main() -> str:
        async with agent_session(host, port) as client:
            return await process_command(client, command)

    typer.echo(f'Processing: "{command}"')
    try:
        reply = asyncio.run(_main())
    except CLIENT_ERRORS as e:
        _fail(f"Error processing command: {e}")
    typer.echo(f"Response: {reply}")


@app.command()
def interactive(
    host: str = typer.Option(settings.agent_host, help="Agent API host"),
    port: int = typer.Option(settings.agent_port, help="Agent API port"),
) -> None:
    """Read commands from stdin until 'exit'."""
    _setup_logging()

    async def _loop() -> None:
        async with agent_session(host, port) as client:
            typer.echo("Voice CLI - Interactive Mode")
            typer.echo('Type your voice commands (type "exit" to quit)\n')
            while True:
                try:
                    line = await asyncio.to_thread(input, "You: ")
                except EOFError:
                    break
                if line.strip().lower() == "exit":
                    typer.echo("Goodbye!")
                    break
                if not line.strip():
                    continue
                try:
                    reply = await process_command(client, line)
                except CLIENT_ERRORS as e:
                    typer.secho(f"Error processing command: {e}", fg=typer.colors.RED, err=True)
                    continue
                typer.echo(f"\nAssistant: {reply}\n")

    asyncio.run(_loop())


@app.command()
def file(
    path: Path = typer.Argument(..., help="Audio clip (.wav, .webm, .mp3) or .txt transcript"),
    speech: bool = typer.Option(True, "--speech/--no-speech", help="Synthesize the reply to an mp3 beside the input"),
    host: str = typer.Option(settings.agent_host, help="Agent API host"),
    port: int = typer.Option(settings.agent_port, help="Agent API port"),
) -> None:
    """Process a recorded command from a file."""
    _setup_logging()
    if not path.exists():
        _fail(f"Audio file not found: {path}")

    from .speech import VoiceOutput, synthesize, voice_interaction

    async def _main() -> Optional[Path]:
        if path.suffix.lower() in TEXT_SUFFIXES:
            text = _read_text(path)
            if not text:
                _fail("Transcript is empty")
            async with agent_session(host, port) as client:
                reply = await process_command(client, text)
            result = VoiceOutput(text=reply, audio=await synthesize(reply) if speech else None)
        else:
            async with agent_session(host, port) as client:
                async def handler(heard: str) -> str:
                    if not heard:
                        _fail("No speech recognised in input")
                    return await process_command(client, heard)

                result = await voice_interaction(path.read_bytes(), handler, filename=path.name, speak=speech)

        typer.echo(f"Response: {result.text}")
        if result.audio is None:
            return None
        output = path.parent / f"response_{int(time.time() * 1000)}.mp3"
        output.write_bytes(result.audio)
        return output

    typer.echo(f"Processing audio file: {path}")
    try:
        output = asyncio.run(_main())
    except CLIENT_ERRORS as e:
        _fail(f"Error processing command: {e}")
    if output is not None:
        typer.echo(f"Generated response audio: {output}")


@app.command()
def serve(
    host: str = typer.Option(settings.agent_host, help="Bind host"),
    port: int = typer.Option(settings.agent_port, help="Bind port"),
) -> None:
    """Run the agent API in the foreground."""
    _setup_logging()
    typer.echo(f"Agent API server running on http://{host}:{port}")
    uvicorn.run("voice_agent.api:app", host=host, port=port, log_level=settings.log_level.lower())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
