"""Models for classification results and food details."""

from pydantic import BaseModel, ConfigDict, Field


class ClassificationResult(BaseModel):
    """A single label returned by the prediction service."""

    label: str = Field(..., description="Classification label (display name)")
    score: float = Field(ge=0.0, le=1.0, description="Confidence score 0-1")

    @property
    def score_percent(self) -> str:
        """Score as a percentage with 4 decimal places."""
        return f"{self.score * 100:.4f}"


class FoodMappingEntry(BaseModel):
    """Validated value of a food mapping line."""

    model_config = ConfigDict(frozen=True)

    display_name: str = Field(..., min_length=1)
    calories: int
    recommendation: str


class FoodDetail(BaseModel):
    """Food details shown to the user for one classification."""

    display_name: str
    calories: int
    recommendation: str
