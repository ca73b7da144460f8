"""Shared pytest fixtures for the Architex test suite.

Provides reusable fixtures for:
- Default configuration and a fixed clock
- An ArchitectureGenerator writing into a temporary root
- Resolver / renderer pairs over temporary stub directories
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from architex.config import ArchitexConfig
from architex.scaffolder import ArchitectureGenerator, TemplateRenderer, TemplateResolver


FIXED_NOW = datetime(2024, 1, 15, 10, 30, 45)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def config() -> ArchitexConfig:
    """Default configuration with deterministic template variables."""
    cfg = ArchitexConfig()
    cfg.templates.variables["year"] = "2024"
    return cfg


@pytest.fixture
def fixed_clock():
    """Clock returning a constant time, for reproducible migration names."""
    return lambda: FIXED_NOW


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def architecture(config: ArchitexConfig, output_root: Path, fixed_clock) -> ArchitectureGenerator:
    """ArchitectureGenerator over the bundled stubs, writing into *output_root*."""
    return ArchitectureGenerator(config, root=output_root, clock=fixed_clock)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


@pytest.fixture
def stub_dirs(tmp_path: Path) -> tuple[Path, Path]:
    """Empty (override, default) stub directories."""
    override = tmp_path / "override"
    default = tmp_path / "default"
    override.mkdir()
    default.mkdir()
    return override, default


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def bundled_resolver() -> TemplateResolver:
    """Resolver over the stubs shipped with the package."""
    return TemplateResolver()
