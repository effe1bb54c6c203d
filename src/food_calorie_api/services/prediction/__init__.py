"""Prediction service client for the classification model."""

from .client import PredictionClient, model_path

__all__ = ["PredictionClient", "model_path"]
