import pytest

from edit_engine.runtime import telemetry


@pytest.fixture(autouse=True, scope="session")
def quiet_telemetry():
    telemetry.configure(preset="quiet")
    yield
