"""Photo analysis: classify an upload and describe the foods found."""

import logging
from collections.abc import Mapping

from food_calorie_api.models.food import ClassificationResult, FoodDetail, FoodMappingEntry
from food_calorie_api.services.detail_resolver import resolve
from food_calorie_api.services.prediction import PredictionClient

logger = logging.getLogger(__name__)

NO_DETECTION_MESSAGE = "Unable to detect this object. What is it ?"


def format_result(item: ClassificationResult, detail: FoodDetail) -> str:
    """Format one classification as an HTML text block."""
    return (
        f"Result :  {detail.display_name} <br/> "
        f"Score : {item.score_percent}% <br/> "
        f"Calories : {detail.calories} <br/> "
        f"Recommendation : {detail.recommendation}"
    )


def describe_results(
    results: list[ClassificationResult],
    table: Mapping[str, FoodMappingEntry],
) -> str:
    """
    Build the response text for a list of classification results.

    Blocks are concatenated in result order. An empty list yields
    NO_DETECTION_MESSAGE.
    """
    text = "".join(format_result(item, resolve(item, table)) for item in results)
    return text or NO_DETECTION_MESSAGE


class UploadService:
    """
    Service for analyzing uploaded photos.

    Usage:
        service = UploadService(prediction_client, food_mapping, "0.5")
        text = await service.analyze(image_bytes)
    """

    def __init__(
        self,
        prediction_client: PredictionClient,
        food_mapping: Mapping[str, FoodMappingEntry],
        score_threshold: str,
    ):
        self._prediction_client = prediction_client
        self._food_mapping = food_mapping
        self._score_threshold = score_threshold

    async def analyze(self, image_data: bytes) -> str:
        """
        Classify an image and describe each detected food.

        Args:
            image_data: Uploaded image bytes

        Returns:
            Response text

        Raises:
            PredictionError: If the prediction call fails
        """
        client = self._prediction_client
        logger.info(
            f"Trigger prediction: model={client.model_name}, "
            f"score_threshold={self._score_threshold}"
        )

        results = await client.predict(image_data, self._score_threshold)
        text = describe_results(results, self._food_mapping)

        logger.info(f"Prediction results: {text}")
        return text
