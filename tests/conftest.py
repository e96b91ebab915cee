"""Pytest configuration and shared fixtures for nesting tests."""

from __future__ import annotations

import pytest

from fabricnest.application.commands import NestLayoutCommand
from fabricnest.domain import FabricSpec, NestingEngine, PieceType


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests exercising several layers together"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def engine() -> NestingEngine:
    """Create a NestingEngine with default collaborators."""
    return NestingEngine()


@pytest.fixture
def nest_command() -> NestLayoutCommand:
    """Create a NestLayoutCommand with a fresh engine."""
    return NestLayoutCommand()


@pytest.fixture
def sample_fabric() -> FabricSpec:
    """The 150 cm roll the tool starts with: 1 cm margins, 0.5 cm gaps."""
    return FabricSpec(width_cm=150, margin_x=1, margin_y=1, gap_x=0.5, gap_y=0.5)


@pytest.fixture
def sample_pieces() -> list[PieceType]:
    """The two sample piece types: four of Cut A and six of Cut B."""
    return [
        PieceType(id="a", label="Cut A", width=25, height=35, quantity=4),
        PieceType(id="b", label="Cut B", width=18, height=28, quantity=6),
    ]
