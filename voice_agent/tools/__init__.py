"""Tool system — registry, executor."""
from .registry import (
    ToolDefinition, ToolInvocation, ToolNotFound, ToolParam, ToolRegistry, ToolResult,
    builtin_handlers, builtin_registry, register_tool,
)
from .executor import Executor, MockExecutor, RemoteExecutor, build_executor

# Auto-import builtin tools to trigger @register_tool decorators
from . import builtin  # noqa
