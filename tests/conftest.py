import pytest
from prometheus_client import REGISTRY

from name_analyzer.app import create_app
from name_analyzer.config import Settings


@pytest.fixture
def settings():
    return Settings(log_level="DEBUG", max_name_length=20, service_name="name-analyzer-test")


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sample():
    """Read a sample from the process-wide registry, 0.0 if it does not exist yet."""
    def _sample(name, **labels):
        return REGISTRY.get_sample_value(name, labels) or 0.0
    return _sample
