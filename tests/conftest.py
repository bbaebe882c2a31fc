"""Shared pytest fixtures for the modscaffold test suite.

Provides reusable fixtures for:
- A fresh ``ScaffoldConfig`` rooted in a temporary directory
- Generators and renderers bound to that configuration
- A private stub override directory
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from modscaffold.config import ScaffoldConfig
from modscaffold.scaffolder.generator import ComponentGenerator, ModuleGenerator
from modscaffold.scaffolder.resolver import ComponentPathResolver
from modscaffold.scaffolder.templates import StubRenderer


FIXED_NOW = datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def modules_dir(tmp_path: Path) -> Path:
    """Temporary base path for modules (auto-cleanup)."""
    base = tmp_path / "app" / "Modules"
    base.mkdir(parents=True)
    yield base


@pytest.fixture
def config(modules_dir: Path) -> ScaffoldConfig:
    """A fresh configuration per test, using the default layout."""
    return ScaffoldConfig(base_path=modules_dir, base_namespace="App\\Modules")


@pytest.fixture
def suffix_config(config: ScaffoldConfig) -> ScaffoldConfig:
    """Same as ``config`` with suffix enforcement turned on."""
    config.append_suffix = True
    return config


# ---------------------------------------------------------------------------
# Engine components
# ---------------------------------------------------------------------------

@pytest.fixture
def resolver(config: ScaffoldConfig) -> ComponentPathResolver:
    return ComponentPathResolver(config)


@pytest.fixture
def renderer(config: ScaffoldConfig) -> StubRenderer:
    return StubRenderer(config)


@pytest.fixture
def generator(config: ScaffoldConfig) -> ComponentGenerator:
    """Component generator with a frozen clock."""
    return ComponentGenerator(config, clock=lambda: FIXED_NOW)


@pytest.fixture
def module_generator(config: ScaffoldConfig) -> ModuleGenerator:
    return ModuleGenerator(config)


# ---------------------------------------------------------------------------
# Stubs
# ---------------------------------------------------------------------------

@pytest.fixture
def stubs_dir(tmp_path: Path) -> Path:
    """Empty stub override directory."""
    path = tmp_path / "stubs"
    path.mkdir()
    yield path
