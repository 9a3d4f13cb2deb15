"""Static figures for the model performance screen.

These are illustrative numbers shown alongside the demo. Nothing in this
package computes them; they are served as-is.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HeadlineStat(BaseModel):
    label: str
    value: str
    caption: str = ""
    note: str = ""


class ModelComparison(BaseModel):
    name: str
    accuracy: float = Field(ge=0.0, le=1.0)
    auc: float = Field(ge=0.0, le=1.0)
    f1: float = Field(ge=0.0, le=1.0)


class CalibrationPoint(BaseModel):
    predicted: float = Field(ge=0.0, le=1.0)
    observed: float = Field(ge=0.0, le=1.0)


class PerformanceReport(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )

    headline: list[HeadlineStat] = []
    model_comparison: list[ModelComparison] = []
    calibration: list[CalibrationPoint] = []


PERFORMANCE_REPORT = PerformanceReport(
    headline=[
        HeadlineStat(
            label="Best AUC-ROC",
            value="0.96",
            caption="LLM (current)",
            note="Outperforms Logistic Regression by +8%",
        ),
        HeadlineStat(
            label="Sensitivity",
            value="0.98",
            caption="Recall",
            note="Critical for ruling out fractures (high negative predictive value).",
        ),
        HeadlineStat(
            label="Training Set",
            value="10k+",
            caption="Samples",
            note="Synthetic clinical data generated based on Amsterdam Rule.",
        ),
    ],
    model_comparison=[
        ModelComparison(name="Logistic Regression", accuracy=0.85, auc=0.88, f1=0.82),
        ModelComparison(name="SVM (RBF)", accuracy=0.89, auc=0.91, f1=0.87),
        ModelComparison(name="LLM (Current)", accuracy=0.94, auc=0.96, f1=0.92),
    ],
    calibration=[
        CalibrationPoint(predicted=0.0, observed=0.02),
        CalibrationPoint(predicted=0.2, observed=0.18),
        CalibrationPoint(predicted=0.4, observed=0.38),
        CalibrationPoint(predicted=0.6, observed=0.62),
        CalibrationPoint(predicted=0.8, observed=0.85),
        CalibrationPoint(predicted=1.0, observed=0.98),
    ],
)
