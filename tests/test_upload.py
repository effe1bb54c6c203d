"""Tests for the photo upload endpoint and UploadService."""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException
from httpx import AsyncClient

from food_calorie_api.api.routes.upload import read_upload
from food_calorie_api.core.config import Settings, get_settings
from food_calorie_api.core.exceptions import PredictionError
from food_calorie_api.main import app
from food_calorie_api.models.food import ClassificationResult, FoodDetail
from food_calorie_api.services.upload import (
    NO_DETECTION_MESSAGE,
    UploadService,
    describe_results,
    format_result,
)

# Sample test image (1x1 red pixel PNG)
TINY_PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8DwHwAFBQIAX8jx0gAAAABJRU5ErkJggg=="
)


def upload_files(content: bytes = TINY_PNG_BYTES) -> dict:
    """Multipart payload with the photo field."""
    return {"photo": ("meal.png", content, "image/png")}


class TestFormatting:
    """Tests for response text formatting."""

    def test_format_result(self):
        """Test a single block matches the expected layout."""
        item = ClassificationResult(label="pizza", score=0.87324)
        detail = FoodDetail(display_name="Pizza", calories=285, recommendation="Eat in moderation")

        assert format_result(item, detail) == (
            "Result :  Pizza <br/> Score : 87.3240% <br/> "
            "Calories : 285 <br/> Recommendation : Eat in moderation"
        )

    @pytest.mark.parametrize(
        "score,expected",
        [(0.87324, "87.3240"), (1.0, "100.0000"), (0.0, "0.0000"), (0.5, "50.0000")],
    )
    def test_score_percent(self, score, expected):
        """Test scores are shown as percentages with 4 decimals."""
        assert ClassificationResult(label="x", score=score).score_percent == expected

    def test_empty_results_use_fallback_message(self, food_mapping):
        """Test no results gives the fixed message."""
        assert describe_results([], food_mapping) == "Unable to detect this object. What is it ?"

    def test_blocks_concatenated_in_order(self, food_mapping):
        """Test N results give N blocks in result order."""
        results = [
            ClassificationResult(label="donuts", score=0.9),
            ClassificationResult(label="takoyaki", score=0.6),
            ClassificationResult(label="pizza", score=0.55),
        ]

        text = describe_results(results, food_mapping)

        assert text.count("Result :  ") == 3
        assert text.index("Donuts") < text.index("takoyaki") < text.index("Pizza")
        assert "Calories : 100 <br/> Recommendation : Eat" in text


class TestUploadService:
    """Tests for UploadService."""

    @pytest.mark.asyncio
    async def test_analyze_passes_threshold(self, prediction_client, food_mapping):
        """Test the configured threshold is passed to the prediction call."""
        service = UploadService(prediction_client, food_mapping, "0.7")

        text = await service.analyze(TINY_PNG_BYTES)

        assert text == NO_DETECTION_MESSAGE
        prediction_client.predict.assert_awaited_once_with(TINY_PNG_BYTES, "0.7")

    @pytest.mark.asyncio
    async def test_analyze_propagates_prediction_error(self, prediction_client, food_mapping):
        """Test prediction failures reach the caller."""
        prediction_client.predict.side_effect = PredictionError("Prediction API error: 500")
        service = UploadService(prediction_client, food_mapping, "0.5")

        with pytest.raises(PredictionError):
            await service.analyze(TINY_PNG_BYTES)


class TestUploadEndpoint:
    """Tests for POST /upload."""

    @pytest.mark.asyncio
    async def test_upload_with_results(self, client: AsyncClient, prediction_client):
        """Test detected foods are described in the response."""
        prediction_client.predict.return_value = [
            ClassificationResult(label="pizza", score=0.87324),
        ]

        response = await client.post("/upload", files=upload_files())

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.text == (
            "Result :  Pizza <br/> Score : 87.3240% <br/> "
            "Calories : 285 <br/> Recommendation : Eat in moderation"
        )

    @pytest.mark.asyncio
    async def test_upload_without_results(self, client: AsyncClient):
        """Test an empty result list gives the fallback message."""
        response = await client.post("/upload", files=upload_files())

        assert response.status_code == 200
        assert response.text == "Unable to detect this object. What is it ?"

    @pytest.mark.asyncio
    async def test_upload_records_one_audit_entry(
        self, client: AsyncClient, access_log_repository
    ):
        """Test each upload writes exactly one access log record."""
        response = await client.post("/upload", files=upload_files())

        assert response.status_code == 200
        access_log_repository.create_entry.assert_awaited_once()
        entry = access_log_repository.create_entry.call_args.args[0]
        assert entry.size == len(TINY_PNG_BYTES)
        assert entry.ip == "10.1.2.3"
        assert entry.desc == NO_DETECTION_MESSAGE
        assert entry.comp_time is not None
        assert entry.comp_time >= entry.init_time

    @pytest.mark.asyncio
    async def test_prediction_failure_returns_error_and_keeps_serving(
        self, client: AsyncClient, prediction_client, access_log_repository
    ):
        """Test a prediction failure is answered, logged, and the app keeps serving."""
        prediction_client.predict.side_effect = PredictionError(
            "Prediction API error: 503", error_code="PROVIDER_ERROR"
        )

        response = await client.post("/upload", files=upload_files())

        assert response.status_code == 502
        assert "try again" in response.text
        entry = access_log_repository.create_entry.call_args.args[0]
        assert entry.desc == "PROVIDER_ERROR: Prediction API error: 503"

        prediction_client.predict.side_effect = None
        prediction_client.predict.return_value = [
            ClassificationResult(label="sushi", score=0.9),
        ]

        response = await client.post("/upload", files=upload_files())

        assert response.status_code == 200
        assert "Sushi" in response.text
        assert access_log_repository.create_entry.await_count == 2

    @pytest.mark.asyncio
    async def test_unexpected_failure_returns_500(
        self, client: AsyncClient, prediction_client, access_log_repository
    ):
        """Test unexpected errors are answered with 500 and still audited."""
        prediction_client.predict.side_effect = RuntimeError("boom")

        response = await client.post("/upload", files=upload_files())

        assert response.status_code == 500
        access_log_repository.create_entry.assert_awaited_once()
        assert "boom" in access_log_repository.create_entry.call_args.args[0].desc

    @pytest.mark.asyncio
    async def test_audit_failure_does_not_affect_response(
        self, client: AsyncClient, prediction_client, access_log_repository
    ):
        """Test a failed access log write is not visible to the client."""
        prediction_client.predict.return_value = [
            ClassificationResult(label="pizza", score=0.9),
        ]
        access_log_repository.create_entry.side_effect = ConnectionError("mongo down")

        response = await client.post("/upload", files=upload_files())

        assert response.status_code == 200
        assert "Pizza" in response.text

    @pytest.mark.asyncio
    async def test_oversized_upload_rejected(
        self, client: AsyncClient, prediction_client, access_log_repository
    ):
        """Test uploads over the size limit are rejected before analysis."""
        app.dependency_overrides[get_settings] = lambda: Settings(
            _env_file=None, file_upload_max_size=10
        )

        response = await client.post("/upload", files=upload_files(b"x" * 11))

        assert response.status_code == 413
        prediction_client.predict.assert_not_awaited()
        access_log_repository.create_entry.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_photo_field(self, client: AsyncClient, prediction_client):
        """Test a request without the photo field fails validation."""
        response = await client.post(
            "/upload", files={"picture": ("meal.png", TINY_PNG_BYTES, "image/png")}
        )

        assert response.status_code == 422
        prediction_client.predict.assert_not_awaited()


class TestReadUpload:
    """Tests for read_upload."""

    @pytest.mark.asyncio
    async def test_declared_size_rejected_before_reading(self):
        """Test a file whose declared size is over the limit is never read."""
        file = MagicMock(size=11)
        file.read = AsyncMock(return_value=b"x" * 11)

        with pytest.raises(HTTPException) as exc_info:
            await read_upload(file, max_size=10)

        assert exc_info.value.status_code == 413
        file.read.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_size_checked_after_reading(self):
        """Test the content length is checked when no size was declared."""
        file = MagicMock(size=None)
        file.read = AsyncMock(return_value=b"x" * 11)

        with pytest.raises(HTTPException) as exc_info:
            await read_upload(file, max_size=10)

        assert exc_info.value.status_code == 413
        file.read.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_within_limit_returns_content(self):
        """Test a file at the limit is returned whole."""
        file = MagicMock(size=10)
        file.read = AsyncMock(return_value=b"x" * 10)

        assert await read_upload(file, max_size=10) == b"x" * 10
