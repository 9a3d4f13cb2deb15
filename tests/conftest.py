import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# No real provider credentials in tests
os.environ["OPENAI_API_KEY"] = ""
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["LLM_PROVIDER"] = "openai"

from scaphoidai.main import app
from scaphoidai.models.patient import Gender, InjuryMechanism, PatientRecord
from scaphoidai.routers.prediction import get_prediction_client
from scaphoidai.services.prediction import PredictionClient
from fakes import FakeBackend


@pytest.fixture
def record():
    return PatientRecord(
        age=34,
        gender=Gender.FEMALE,
        injury_mechanism=InjuryMechanism.FALL_ON_OUTSTRETCHED_HAND,
        hours_since_injury=6,
        snuffbox_tenderness=True,
        tubercle_tenderness=True,
        thumb_compression_pain=False,
        ulnar_deviation_pain=True,
        swelling=False,
        grip_strength_loss=True,
    )


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def prediction_client(fake_backend):
    return PredictionClient("test-key", backend=fake_backend, timeout=5.0)


@pytest_asyncio.fixture
async def async_client(prediction_client):
    """Async httpx client against the app with the prediction client overridden."""
    app.dependency_overrides[get_prediction_client] = lambda: prediction_client
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
