import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from scaphoidai.config import LLM_BASE_URL, LLM_MODEL, LLM_PROVIDER, LLM_TIMEOUT_SECONDS, api_key_for
from scaphoidai.routers import prediction
from scaphoidai.services.prediction import PredictionClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_prediction_client() -> PredictionClient:
    return PredictionClient(
        api_key_for(LLM_PROVIDER),
        provider=LLM_PROVIDER,
        model=LLM_MODEL,
        base_url=LLM_BASE_URL,
        timeout=LLM_TIMEOUT_SECONDS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting ScaphoidAI...")
    client = build_prediction_client()
    if not client.available():
        logger.warning("No API key configured for provider '%s'; predictions will fail", LLM_PROVIDER)
    app.state.prediction_client = client
    yield
    await client.aclose()
    logger.info("ScaphoidAI shut down")


app = FastAPI(
    title="ScaphoidAI",
    description="Scaphoid fracture risk estimator - LLM-backed clinical decision support demo",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(prediction.router)
