"""Shared fixtures: builtin registry, zero-latency executor, frozen clock."""
from datetime import datetime, timezone

import pytest

from voice_agent.dispatcher import Dispatcher, DispatcherConfig
from voice_agent.tools.executor import MockExecutor
from voice_agent.tools.registry import builtin_registry

FROZEN_NOW = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def registry():
    return builtin_registry()


@pytest.fixture
def executor(registry):
    return MockExecutor(registry, delay=0)


@pytest.fixture
def frozen_clock():
    return lambda: FROZEN_NOW


@pytest.fixture
def dispatcher(registry, executor, frozen_clock):
    return Dispatcher(DispatcherConfig(registry=registry, executor=executor, clock=frozen_clock))
