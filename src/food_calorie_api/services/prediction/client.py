"""HTTP client for the remote image classification service."""

import base64
import logging
from typing import Any

import httpx

from food_calorie_api.core.config import Settings
from food_calorie_api.core.exceptions import PredictionError
from food_calorie_api.models.food import ClassificationResult

logger = logging.getLogger(__name__)

API_VERSION = "v1beta1"


def model_path(project_id: str, region_name: str, model_id: str) -> str:
    """Build the fully-qualified model resource name."""
    return f"projects/{project_id}/locations/{region_name}/models/{model_id}"


class PredictionClient:
    """Client for the managed classification model's predict endpoint."""

    def __init__(
        self,
        base_url: str,
        project_id: str,
        region_name: str,
        model_id: str,
        access_token: str = "",
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize the prediction client.

        Args:
            base_url: Base URL of the prediction API (e.g., "https://automl.googleapis.com")
            project_id: Cloud project that owns the model
            region_name: Region the model is deployed in
            model_id: Model identifier
            access_token: Optional OAuth bearer token
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.model_name = model_path(project_id, region_name, model_id)
        self.access_token = access_token
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "PredictionClient":
        """Create a client configured from settings."""
        return cls(
            base_url=settings.prediction_api_url,
            project_id=settings.project_id,
            region_name=settings.region_name,
            model_id=settings.model_id,
            access_token=settings.prediction_access_token,
            timeout=settings.prediction_timeout,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {}
            if self.access_token:
                headers["Authorization"] = f"Bearer {self.access_token}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=httpx.Timeout(self.timeout),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def health_check(self) -> bool:
        """
        Check if the model resource is reachable.

        Returns:
            True if the model metadata can be fetched
        """
        try:
            client = await self._get_client()
            response = await client.get(f"/{API_VERSION}/{self.model_name}")
            return response.status_code == 200
        except httpx.HTTPError as e:
            logger.warning(f"Prediction service health check failed: {e}")
            return False

    async def predict(
        self,
        image_data: bytes,
        score_threshold: str,
    ) -> list[ClassificationResult]:
        """
        Classify an image.

        Args:
            image_data: Raw image bytes
            score_threshold: Minimum score the service should return, passed through as-is

        Returns:
            Classification results in the order the service returned them

        Raises:
            PredictionError: If the request fails or the response is invalid
        """
        request_body = {
            "payload": {
                "image": {
                    "imageBytes": base64.b64encode(image_data).decode("utf-8"),
                },
            },
            "params": {"score_threshold": score_threshold},
        }

        logger.debug(f"Sending prediction request (image size: {len(image_data)} bytes)")

        try:
            client = await self._get_client()
            response = await client.post(
                f"/{API_VERSION}/{self.model_name}:predict",
                json=request_body,
            )
        except httpx.HTTPError as e:
            raise PredictionError(
                message=f"Prediction request failed: {e}",
                error_code="CONNECTION_ERROR",
                details={"model": self.model_name},
            ) from e

        if response.status_code != 200:
            raise PredictionError(
                message=f"Prediction API error: {response.status_code}",
                error_code="PROVIDER_ERROR",
                details={"status_code": response.status_code, "body": response.text},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise PredictionError(
                message="Prediction API returned invalid JSON",
                error_code="INVALID_RESPONSE",
                details={"body": response.text[:500]},
            ) from e

        return self._parse_response(data)

    def _parse_response(self, data: Any) -> list[ClassificationResult]:
        """Convert the predict response payload into classification results."""
        if not isinstance(data, dict):
            raise PredictionError(
                message="Prediction API returned an unexpected body",
                error_code="INVALID_RESPONSE",
            )

        results = []
        for item in data.get("payload") or []:
            try:
                results.append(
                    ClassificationResult(
                        label=item["displayName"],
                        score=item["classification"]["score"],
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                raise PredictionError(
                    message=f"Malformed prediction item: {e}",
                    error_code="INVALID_RESPONSE",
                    details={"item": item},
                ) from e

        logger.info(f"Prediction complete: {len(results)} results")
        return results
