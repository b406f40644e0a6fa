from pathlib import Path

import pytest

from bom_planner.config.loader import load_snapshot
from bom_planner.planning.builder import PlanningInputBuilder, PlanningInputs

SAMPLE_SNAPSHOT = Path(__file__).parent.parent / "data" / "sample_snapshot.json"


@pytest.fixture
def sample_document() -> dict:
    return load_snapshot(str(SAMPLE_SNAPSHOT))


@pytest.fixture
def sample_inputs(sample_document: dict) -> PlanningInputs:
    return PlanningInputBuilder(sample_document).build()
