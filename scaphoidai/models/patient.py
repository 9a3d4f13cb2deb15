from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class InjuryMechanism(str, Enum):
    FALL_ON_OUTSTRETCHED_HAND = "Fall on outstretched hand (FOOSH)"
    DIRECT_BLOW = "Direct blow to wrist"
    SPORTS_INJURY = "Sports related injury"
    TRAFFIC_ACCIDENT = "Traffic accident"
    OTHER = "Other"


class PatientRecord(BaseModel):
    """Demographics and examination findings for a suspected scaphoid fracture.

    Immutable: edits build a new record with ``model_copy(update=...)``.
    Serialises with camelCase keys; accepts either camelCase or field names.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    age: int = Field(ge=0, le=120)
    gender: Gender
    injury_mechanism: InjuryMechanism
    hours_since_injury: int = Field(ge=0)
    snuffbox_tenderness: bool = False  # ASBT
    tubercle_tenderness: bool = False  # STT
    thumb_compression_pain: bool = False  # LCT
    ulnar_deviation_pain: bool = False
    swelling: bool = False
    grip_strength_loss: bool = False
