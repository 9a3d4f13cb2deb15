import asyncio
import logging

from pydantic import ValidationError

from scaphoidai.errors import ConfigurationError, ServiceError
from scaphoidai.models.patient import PatientRecord
from scaphoidai.models.prediction import PredictionResult, RiskLevel
from scaphoidai.services.llm import GenerationBackend, _strip_json, build_backend

logger = logging.getLogger(__name__)

# Fixed low sampling temperature for repeatable scoring
PREDICTION_TEMPERATURE = 0.2

PREDICTION_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "probability": {
            "type": "number",
            "description": "Estimated probability of a true scaphoid fracture (0-100).",
        },
        "riskLevel": {
            "type": "string",
            "enum": [level.value for level in RiskLevel],
            "description": "Categorical risk level.",
        },
        "reasoning": {
            "type": "string",
            "description": (
                "Brief clinical reasoning explaining the score based on symptoms "
                "like ASBT, STT, and LCT."
            ),
        },
        "recommendation": {
            "type": "string",
            "description": (
                "Clinical recommendation (e.g., 'Discharge with advice', "
                "'Splint and refer to fracture clinic', 'Urgent MRI')."
            ),
        },
        "clinicalRuleReference": {
            "type": "string",
            "description": (
                "Reference to a clinical rule used if applicable "
                "(e.g., 'Amsterdam Scaphoid Rule')."
            ),
        },
    },
    "required": ["probability", "riskLevel", "reasoning", "recommendation"],
}

PROMPT_TEMPLATE = """You are an expert orthopedic consultant and AI model specializing in wrist trauma.
Analyze the following patient data to estimate the probability of a TRUE scaphoid fracture.

Use established clinical decision rules (like the Amsterdam Scaphoid Fracture Rule or similar validated heuristics) to weight the symptoms.

Patient Data:
- Age: {age}
- Gender: {gender}
- Mechanism of Injury: {mechanism}
- Time since injury: {hours} hours
- Anatomical Snuffbox Tenderness (ASBT): {snuffbox}
- Scaphoid Tubercle Tenderness (STT): {tubercle}
- Longitudinal Compression of Thumb Pain (LCT): {thumb}
- Pain on Ulnar Deviation: {ulnar}
- Swelling visible: {swelling}
- Reported Grip Strength Loss: {grip}

Provide a probability percentage (0-100), a risk classification (Low, Moderate or High), concise reasoning, and a next-step recommendation.
Return only a JSON object matching the requested schema, with no other text.
"""


def _sign(value: bool) -> str:
    return "Positive" if value else "Negative"


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def render_prompt(record: PatientRecord) -> str:
    """Render every field of the record into the fixed prompt template."""
    return PROMPT_TEMPLATE.format(
        age=record.age,
        gender=record.gender.value,
        mechanism=record.injury_mechanism.value,
        hours=record.hours_since_injury,
        snuffbox=_sign(record.snuffbox_tenderness),
        tubercle=_sign(record.tubercle_tenderness),
        thumb=_sign(record.thumb_compression_pain),
        ulnar=_sign(record.ulnar_deviation_pain),
        swelling=_yes_no(record.swelling),
        grip=_yes_no(record.grip_strength_loss),
    )


def parse_prediction(raw: str) -> PredictionResult:
    """Validate raw model output against the PredictionResult shape.

    Raises ServiceError on empty text, malformed JSON, or any schema violation
    (including a riskLevel outside Low/Moderate/High).
    """
    if not raw or not raw.strip():
        logger.error("Prediction service returned an empty response")
        raise ServiceError()
    try:
        return PredictionResult.model_validate_json(_strip_json(raw))
    except ValidationError as e:
        logger.error("Prediction response failed validation: %s", e)
        raise ServiceError() from e


class PredictionClient:
    """Scores a PatientRecord by delegating to a remote generation backend.

    The credential is checked on each call, before any backend is built or
    contacted. Pass ``backend`` to inject a transport (tests, alternative
    providers); otherwise one is built from ``provider`` on first use and
    released by :meth:`aclose`.
    """

    def __init__(
        self,
        api_key: str,
        backend: GenerationBackend | None = None,
        *,
        provider: str = "openai",
        model: str = "",
        base_url: str = "",
        timeout: float = 30.0,
        temperature: float = PREDICTION_TEMPERATURE,
    ) -> None:
        self.api_key = api_key
        self.provider = provider
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self.temperature = temperature
        self._backend = backend

    def available(self) -> bool:
        return bool(self.api_key)

    def _get_backend(self) -> GenerationBackend:
        if self._backend is None:
            self._backend = build_backend(
                self.provider,
                self.api_key,
                model=self.model,
                base_url=self.base_url,
                timeout=self.timeout,
            )
        return self._backend

    async def predict(self, record: PatientRecord) -> PredictionResult:
        if not self.api_key:
            raise ConfigurationError()

        backend = self._get_backend()
        prompt = render_prompt(record)

        try:
            raw = await asyncio.wait_for(
                backend.generate(prompt, PREDICTION_SCHEMA, self.temperature),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("Prediction request timed out after %.1fs", self.timeout)
            raise ServiceError() from e
        except Exception as e:
            logger.error("Prediction request failed: %s", e)
            raise ServiceError() from e

        return parse_prediction(raw)

    async def aclose(self) -> None:
        if self._backend is not None:
            await self._backend.close()
            self._backend = None
