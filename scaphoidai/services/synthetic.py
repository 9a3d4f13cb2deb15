"""Synthetic patients for the demo form and batch simulation.

A single scenario flag (fracture-like or not) is drawn first; every clinical
sign is then an independent Bernoulli draw whose odds depend only on that
flag. The odds are illustrative design parameters, not clinical statistics.

The single-record form and the batch simulation have always used slightly
different parameters. They are kept as two named profiles.
"""

import random
from dataclasses import dataclass

from scaphoidai.models.patient import Gender, InjuryMechanism, PatientRecord


@dataclass(frozen=True)
class SignOdds:
    fracture: float
    no_fracture: float

    def draw(self, rng: random.Random, fracture_like: bool) -> bool:
        p = self.fracture if fracture_like else self.no_fracture
        return rng.random() < p


@dataclass(frozen=True)
class GeneratorProfile:
    name: str
    age_range: tuple[int, int]  # inclusive
    hours_range: tuple[int, int]  # inclusive
    snuffbox_tenderness: SignOdds
    tubercle_tenderness: SignOdds
    thumb_compression_pain: SignOdds
    ulnar_deviation_pain: SignOdds
    swelling: SignOdds
    grip_strength_loss: SignOdds
    foosh_share: float = 0.7

    def sign_odds(self) -> dict[str, SignOdds]:
        return {
            "snuffbox_tenderness": self.snuffbox_tenderness,
            "tubercle_tenderness": self.tubercle_tenderness,
            "thumb_compression_pain": self.thumb_compression_pain,
            "ulnar_deviation_pain": self.ulnar_deviation_pain,
            "swelling": self.swelling,
            "grip_strength_loss": self.grip_strength_loss,
        }


SINGLE_RECORD_PROFILE = GeneratorProfile(
    name="single",
    age_range=(16, 64),
    hours_range=(1, 48),
    snuffbox_tenderness=SignOdds(0.8, 0.2),
    tubercle_tenderness=SignOdds(0.7, 0.3),
    thumb_compression_pain=SignOdds(0.6, 0.2),
    ulnar_deviation_pain=SignOdds(0.5, 0.2),
    swelling=SignOdds(0.6, 0.2),
    grip_strength_loss=SignOdds(0.8, 0.4),
)

BATCH_PROFILE = GeneratorProfile(
    name="batch",
    age_range=(15, 64),
    hours_range=(0, 23),
    snuffbox_tenderness=SignOdds(0.7, 0.2),
    tubercle_tenderness=SignOdds(0.6, 0.3),
    thumb_compression_pain=SignOdds(0.5, 0.2),
    ulnar_deviation_pain=SignOdds(0.4, 0.4),
    swelling=SignOdds(0.5, 0.2),
    grip_strength_loss=SignOdds(0.7, 0.3),
)

PROFILES = {p.name: p for p in (SINGLE_RECORD_PROFILE, BATCH_PROFILE)}

DEFAULT_FRACTURE_BIAS = 0.5


def generate_synthetic_record(
    bias: float | None = None,
    profile: GeneratorProfile = SINGLE_RECORD_PROFILE,
    rng: random.Random | None = None,
) -> PatientRecord:
    """Draw one synthetic patient.

    ``bias`` is the probability that the scenario is fracture-like
    (default 0.5). ``rng`` can be seeded for reproducible output.
    """
    if bias is None:
        bias = DEFAULT_FRACTURE_BIAS
    if not 0.0 <= bias <= 1.0:
        raise ValueError(f"bias must be between 0 and 1, got {bias}")
    rng = rng or random.Random()

    fracture_like = rng.random() < bias
    mechanism = (
        InjuryMechanism.FALL_ON_OUTSTRETCHED_HAND
        if rng.random() < profile.foosh_share
        else InjuryMechanism.SPORTS_INJURY
    )
    signs = {field: odds.draw(rng, fracture_like) for field, odds in profile.sign_odds().items()}

    return PatientRecord(
        age=rng.randint(*profile.age_range),
        gender=rng.choice([Gender.MALE, Gender.FEMALE]),
        injury_mechanism=mechanism,
        hours_since_injury=rng.randint(*profile.hours_range),
        **signs,
    )
