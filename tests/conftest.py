"""Pytest configuration and shared fixtures for sizefactor-centering tests."""

import sys
from pathlib import Path

import pytest
import numpy as np

# Add package to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tests.fixtures import (
    create_size_factors,
    create_blocked_size_factors,
)


# ============================================================================
# Size Factor Fixtures
# ============================================================================


@pytest.fixture
def size_factors() -> np.ndarray:
    """Create 200 valid float64 size factors."""
    return create_size_factors(n_cells=200)


@pytest.fixture
def size_factors_f32() -> np.ndarray:
    """Create 200 valid float32 size factors."""
    return create_size_factors(n_cells=200, dtype=np.float32)


@pytest.fixture
def blocked_size_factors():
    """Create size factors for three blocks of increasing coverage."""
    return create_blocked_size_factors()


@pytest.fixture
def example_blocked():
    """Small two-block example with known block means 4/3 and 22/3."""
    factors = np.array([1.0, 1.0, 2.0, 2.0, 10.0, 10.0])
    blocks = np.array([0, 0, 0, 1, 1, 1])
    return factors, blocks


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_yaml(tmp_path) -> Path:
    """Create sample size factor configuration file."""
    import yaml

    config = {
        "size_factors": {
            "centering": {
                "block_mode": "per_block",
                "ignore_invalid": False,
            },
            "sanitize": {
                "enabled": True,
                "handle_zero": "sanitize",
                "handle_nan": "ignore",
            },
        },
    }

    path = tmp_path / "size_factors.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)

    return path
