"""Shared fixtures for the CityGrowth test suite."""
import pytest

from citygrowth.citygen.road.population import PopulationField
from citygrowth.citygen.road.road_manager import RoadManager
from citygrowth.config import Config
from citygrowth.utils.logger import Logger


@pytest.fixture(autouse=True, scope='session')
def quiet_logging():
    """Keep test output free of generator logs."""
    Logger.configure(logging_enabled=False, log_to_console=False, log_to_file=False)
    yield


@pytest.fixture
def config():
    """Default configuration with logging switched off."""
    return Config(overrides={'logging': {'enabled': False}})


@pytest.fixture
def flat_population():
    """Density field whose noise is 0 everywhere, which is above every branch threshold."""
    return PopulationField(lambda x, y: 0.0)


@pytest.fixture
def road_manager(config):
    """An empty segment arena."""
    return RoadManager(config)
