import pytest

from atlas_sim.objects.constellation import build_default_scenario
from atlas_sim.render.scene_graph import FixedViewport, SceneGraph
from atlas_sim.simulation.scheduler import ManualScheduler
from atlas_sim.simulation.state import SceneState


@pytest.fixture
def scenario():
    return build_default_scenario(seed=42)


@pytest.fixture
def scene_state(scenario):
    return SceneState(scenario=scenario)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def graph():
    return SceneGraph()


@pytest.fixture
def viewport():
    return FixedViewport(1280, 720)
