import asyncio
import logging
import random

from scaphoidai.errors import PredictionError
from scaphoidai.models.prediction import BatchEntry, BatchReport
from scaphoidai.services.prediction import PredictionClient
from scaphoidai.services.synthetic import BATCH_PROFILE, GeneratorProfile, generate_synthetic_record

logger = logging.getLogger(__name__)


async def run_batch(
    client: PredictionClient,
    n: int,
    *,
    profile: GeneratorProfile = BATCH_PROFILE,
    rng: random.Random | None = None,
    stop: asyncio.Event | None = None,
) -> BatchReport:
    """Generate ``n`` synthetic patients and score them one at a time.

    Calls never overlap, so the remote service sees at most one request from
    a batch at any moment. A failed prediction is logged and left out; the
    remaining iterations still run. ``report.failed`` counts the gaps.
    Setting ``stop`` ends the batch before its next iteration.
    """
    if n < 1:
        raise ValueError(f"batch size must be positive, got {n}")
    rng = rng or random.Random()

    entries: list[BatchEntry] = []
    attempted = 0
    for i in range(n):
        if stop is not None and stop.is_set():
            logger.info("Batch stopped after %d of %d iterations", i, n)
            break
        attempted += 1
        record = generate_synthetic_record(profile=profile, rng=rng)
        try:
            result = await client.predict(record)
        except PredictionError as e:
            logger.warning("Batch iteration %d/%d failed: %s", i + 1, n, e)
            continue
        entries.append(BatchEntry(patient=record, result=result))

    report = BatchReport(requested=n, attempted=attempted, entries=entries)
    logger.info("Batch complete: %d/%d predictions succeeded", len(entries), n)
    return report
