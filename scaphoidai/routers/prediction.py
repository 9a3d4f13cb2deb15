import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from scaphoidai.config import BATCH_SIZE, MAX_BATCH_SIZE
from scaphoidai.errors import ConfigurationError, ServiceError
from scaphoidai.models.patient import PatientRecord
from scaphoidai.models.performance import PERFORMANCE_REPORT, PerformanceReport
from scaphoidai.models.prediction import BatchReport, PredictionResult
from scaphoidai.services.batch import run_batch
from scaphoidai.services.prediction import PredictionClient
from scaphoidai.services.synthetic import PROFILES, generate_synthetic_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["prediction"])


def get_prediction_client(request: Request) -> PredictionClient:
    return request.app.state.prediction_client


@router.post(
    "/predict",
    response_model=PredictionResult,
    response_model_exclude_none=True,
)
async def predict(
    body: PatientRecord,
    client: PredictionClient = Depends(get_prediction_client),
):
    """Estimate scaphoid fracture probability for one patient."""
    try:
        return await client.predict(body)
    except ConfigurationError as e:
        logger.warning("Prediction rejected [%s]: %s", e.code, e.message)
        raise HTTPException(status_code=503, detail=e.message) from None
    except ServiceError as e:
        logger.warning("Prediction failed [%s]", e.code)
        raise HTTPException(status_code=502, detail=e.message) from None


@router.get("/synthetic", response_model=PatientRecord)
async def synthetic_patient(
    profile: str = Query("single", pattern="^(single|batch)$"),
    bias: float | None = Query(None, ge=0.0, le=1.0),
):
    """Generate a random patient to prefill the form.

    ``bias`` is the chance of a fracture-like presentation (default 0.5).
    """
    return generate_synthetic_record(bias=bias, profile=PROFILES[profile])


@router.post("/batch", response_model=BatchReport, response_model_exclude_none=True)
async def batch(
    n: int = Query(BATCH_SIZE, ge=1, le=MAX_BATCH_SIZE),
    client: PredictionClient = Depends(get_prediction_client),
):
    """Run ``n`` synthetic patients through the predictor, sequentially.

    Failed predictions are skipped; ``failed`` in the response counts them.
    """
    return await run_batch(client, n)


@router.get("/performance", response_model=PerformanceReport)
async def performance():
    """Static model-comparison and calibration figures for the performance screen."""
    return PERFORMANCE_REPORT
