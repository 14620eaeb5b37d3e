"""Tool registry — tool definitions, results, and the immutable catalogue."""
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


class ToolNotFound(LookupError):
    """Raised when a tool name is not present in the registry."""

    def __init__(self, name: str):
        super().__init__(f"Tool '{name}' not found")
        self.name = name


@dataclass(frozen=True)
class ToolParam:
    name: str
    type: str = "string"
    description: str = ""
    required: bool = True


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    params: Tuple[ToolParam, ...] = ()

    @property
    def required_fields(self) -> List[str]:
        return [p.name for p in self.params if p.required]

    def input_schema(self) -> Dict[str, Any]:
        """JSON-schema style description of the tool input."""
        return {
            "type": "object",
            "properties": {
                p.name: {"type": p.type, "description": p.description}
                for p in self.params
            },
            "required": self.required_fields,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


@dataclass
class ToolInvocation:
    tool_name: str
    input: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolResult:
    success: bool
    result: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, result: Any) -> "ToolResult":
        return cls(success=True, result=result)

    @classmethod
    def fail(cls, error: str) -> "ToolResult":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "result": self.result}
        return {"success": False, "error": self.error}


ToolHandler = Callable[[Dict[str, Any]], Awaitable[Any]]


class ToolRegistry:
    """Read-only catalogue of tool definitions, kept in registration order."""

    def __init__(self, definitions: Iterable[ToolDefinition]):
        self._tools: Dict[str, ToolDefinition] = {}
        for tool in definitions:
            if tool.name in self._tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self._tools[tool.name] = tool

    def list(self) -> List[ToolDefinition]:
        return list(self._tools.values())

    def get(self, name: str) -> ToolDefinition:
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFound(name) from None

    def names(self) -> List[str]:
        return list(self._tools)

    def filter(self, allowed: Optional[Iterable[str]] = None) -> List[ToolDefinition]:
        """Definitions whose names appear in ``allowed``; everything when it is empty."""
        allowed = set(allowed or ())
        if not allowed:
            return self.list()
        return [tool for tool in self._tools.values() if tool.name in allowed]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._tools)


# Builtin tools register themselves here via @register_tool at import time.
_builtin_tools: Dict[str, ToolDefinition] = {}
_builtin_handlers: Dict[str, ToolHandler] = {}


def register_tool(name: str, description: str = "", params: Optional[List[ToolParam]] = None):
    """Decorator to register a builtin tool handler."""
    def decorator(func):
        _builtin_tools[name] = ToolDefinition(
            name=name,
            description=description or func.__doc__ or "",
            params=tuple(params or []),
        )
        _builtin_handlers[name] = func
        logger.info(f"Registered tool: {name}")
        return func
    return decorator


def builtin_registry() -> ToolRegistry:
    """Snapshot the builtin tools into an immutable registry."""
    from . import builtin  # noqa: F401  (triggers @register_tool)
    return ToolRegistry(_builtin_tools.values())


def builtin_handlers() -> Dict[str, ToolHandler]:
    from . import builtin  # noqa: F401
    return dict(_builtin_handlers)


def input_text(args: Dict[str, Any], key: str) -> str:
    """Render an input field for a result message; absent fields render empty."""
    value = args.get(key)
    return "" if value is None else str(value)
