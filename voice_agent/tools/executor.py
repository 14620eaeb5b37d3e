"""Tool executor — turns a ToolInvocation into exactly one ToolResult.

Executors never raise: unknown tools, handler exceptions and transport
errors all come back as a failed ToolResult.
"""
import abc
import asyncio
import logging
import time
from typing import Dict, Optional

import httpx

from .registry import (
    ToolHandler, ToolInvocation, ToolNotFound, ToolRegistry, ToolResult, builtin_handlers,
)

logger = logging.getLogger(__name__)


class Executor(abc.ABC):
    @abc.abstractmethod
    async def execute(self, invocation: ToolInvocation) -> ToolResult:
        ...


class MockExecutor(Executor):
    """Runs the builtin stub handlers with a small simulated latency."""

    def __init__(self, registry: ToolRegistry, handlers: Optional[Dict[str, ToolHandler]] = None,
                 delay: float = 0.1):
        self.registry = registry
        self.handlers = builtin_handlers() if handlers is None else dict(handlers)
        self.delay = delay

    async def execute(self, invocation: ToolInvocation) -> ToolResult:
        name = invocation.tool_name
        try:
            self.registry.get(name)
        except ToolNotFound as e:
            logger.warning(f"Unknown tool: {name}")
            return ToolResult.fail(str(e))

        handler = self.handlers.get(name)
        if handler is None:
            return ToolResult.fail(f"Unknown tool: {name}")

        arg_str = ", ".join(f"{k}={v!r}" for k, v in invocation.input.items())
        logger.info(f"Executing tool: {name}({arg_str})")
        t0 = time.monotonic()

        try:
            if self.delay > 0:
                await asyncio.sleep(self.delay)
            result = ToolResult.ok(await handler(invocation.input))
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}", exc_info=True)
            result = ToolResult.fail(str(e) or type(e).__name__)

        elapsed = time.monotonic() - t0
        logger.info(f"Tool {name}: {elapsed:.1f}s -> {'ok' if result.success else 'error'}")
        return result


class RemoteExecutor(Executor):
    """Forwards invocations to a tool server: POST {base_url}/tool/execute."""

    def __init__(self, registry: ToolRegistry, base_url: str, timeout: float = 30.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.registry = registry
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def execute(self, invocation: ToolInvocation) -> ToolResult:
        name = invocation.tool_name
        if name not in self.registry:
            logger.warning(f"Unknown tool: {name}")
            return ToolResult.fail(f"Tool '{name}' not found")

        logger.info(f"Executing tool remotely: {name} via {self.base_url}")
        t0 = time.monotonic()
        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                         transport=self._transport) as client:
                resp = await client.post("/tool/execute", json={"toolName": name, "input": invocation.input})
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Tool server returned {e.response.status_code} for {name}")
            return ToolResult.fail(f"Tool server error: HTTP {e.response.status_code}")
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}", exc_info=True)
            return ToolResult.fail(str(e) or type(e).__name__)

        elapsed = time.monotonic() - t0
        logger.info(f"Tool {name}: {elapsed:.1f}s (remote)")

        if not isinstance(data, dict):
            return ToolResult.fail("Malformed tool server response")
        if data.get("success"):
            return ToolResult.ok(data.get("result"))
        return ToolResult.fail(data.get("error") or "Unknown error")


def build_executor(settings, registry: ToolRegistry) -> Executor:
    """Pick the executor named by ``settings.executor``."""
    if settings.executor == "remote":
        return RemoteExecutor(registry, settings.tool_server_url, timeout=settings.tool_timeout_s)
    if settings.executor != "mock":
        logger.warning(f"Unknown executor '{settings.executor}', falling back to mock")
    return MockExecutor(registry, delay=settings.mock_delay_s)
