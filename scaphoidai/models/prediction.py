from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from scaphoidai.models.patient import PatientRecord


class RiskLevel(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class PredictionResult(BaseModel):
    """Fracture risk estimate returned by the remote model (structured output)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    probability: float = Field(ge=0, le=100, strict=True)
    risk_level: RiskLevel
    reasoning: str = Field(min_length=1)
    recommendation: str = Field(min_length=1)
    clinical_rule_reference: str | None = None

    def to_wire(self) -> dict:
        """camelCase payload with the optional rule reference dropped when unset."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class BatchEntry(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    patient: PatientRecord
    result: PredictionResult


class BatchReport(BaseModel):
    """Outcome of a simulated batch: successful entries in generation order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    requested: int = Field(ge=1)
    attempted: int = Field(ge=0)
    entries: list[BatchEntry] = []

    @computed_field
    @property
    def failed(self) -> int:
        return self.attempted - len(self.entries)
