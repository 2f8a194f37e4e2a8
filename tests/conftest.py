"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (no .env, in-memory stores)
  - Provide domain factories (aspirants, positions, identities)
  - Reset cached singletons between tests

Collaborators:
  - pytest / pytest-asyncio
  - electoral.domain: entities used by the factories
  - electoral.container: lru_cache singletons

Notes:
  - Fixtures are auto-discovered by pytest
  - Async tests are marked explicitly with @pytest.mark.asyncio
"""

import os
import sys
from pathlib import Path
from uuid import uuid4

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from electoral.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

os.environ.setdefault("APP_ENV", "test")
os.environ["DATABASE_URL"] = ""

from electoral.container import clear_container_cache  # noqa: E402
from electoral.domain.entities import (  # noqa: E402
    Aspirant,
    Department,
    PositionRequirement,
)
from electoral.domain.lifecycle import AspirantStatus  # noqa: E402
from electoral.identity.session import Identity  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _reset_singletons():
    app_config.get_settings.cache_clear()
    clear_container_cache()
    yield
    app_config.get_settings.cache_clear()
    clear_container_cache()


# ============================================================================
# Identities
# ============================================================================


@pytest.fixture
def admin_identity() -> Identity:
    return Identity(user_id="admin-1", email="admin@cohssa.test")


@pytest.fixture
def voter_identity() -> Identity:
    return Identity(user_id="voter-1", email="voter@cohssa.test")


# ============================================================================
# Domain factories
# ============================================================================


@pytest.fixture
def position() -> PositionRequirement:
    """President: minimum CGPA 3.00."""
    return PositionRequirement(
        position_id=uuid4(), position_name="President", min_cgpa=3.0
    )


@pytest.fixture
def make_aspirant(position: PositionRequirement):
    """Factory: aspirant for `position` with overridable fields."""

    def _make(**overrides) -> Aspirant:
        values = {
            "id": uuid4(),
            "full_name": "Adaeze Okafor",
            "matric": "19/08NUR012",
            "department": Department.NURSING_SCIENCES,
            "position_id": position.position_id,
            "cgpa": 3.5,
            "status": AspirantStatus.SCREENED,
        }
        values.update(overrides)
        return Aspirant(**values)

    return _make
