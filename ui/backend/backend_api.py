"""
FastAPI backend server for the hybrid text classifier.

This server provides REST API endpoints to interface with the classification library,
handling single and batch classification, the training set and hybrid settings.
"""

import sys
import logging
from datetime import datetime
from typing import List, Dict, Any, Optional

# Configure logging for the backend
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

# Set specific loggers to appropriate levels
logging.getLogger("botocore").setLevel(logging.WARNING)  # Reduce boto3 noise
logging.getLogger("urllib3").setLevel(logging.WARNING)  # Reduce HTTP noise

logger = logging.getLogger(__name__)

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .config import config

from hybrid_text_classifier import (
    HybridClassifier,
    HybridSettings,
    LLMClassifier,
    TrainingSet,
    split_batch_text,
    parse_categories,
    ClassifierError,
    InvalidInputError,
    ConfigurationError,
    TrainingSetError
)
from hybrid_text_classifier.config import config as classifier_config


app = FastAPI(
    title="Hybrid Text Classifier API",
    description="LLM, TF-IDF and rule-based text classification with explicit fusion rules",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Service state owned by the app
remote_classifier: Optional[LLMClassifier] = None
training_set = TrainingSet()
settings = HybridSettings.from_config()
categories: str = classifier_config.fusion.default_categories


def initialize_services() -> None:
    """Initialize the remote classifier and load the training set if configured."""
    global remote_classifier, training_set

    if config.api.enable_remote_classifier:
        try:
            remote_classifier = LLMClassifier(
                model_id=config.aws.classification_model,
                aws_region=config.aws.bedrock_region
            )
            logger.info("Remote classifier initialized")
        except ConfigurationError as e:
            logger.warning(f"Remote classifier unavailable, rule-based fallback only: {e}")
            remote_classifier = None

    if config.api.training_set_path:
        try:
            training_set = TrainingSet.load(config.api.training_set_path)
        except TrainingSetError as e:
            logger.warning(f"Could not load training set, starting empty: {e}")


# Initialize services on startup
initialize_services()


# Pydantic models for API requests/responses
class ClassificationRequestModel(BaseModel):
    """API model for single-text classification."""
    text: str = Field(..., description="Text to classify")
    categories: Optional[str] = Field(default=None, description="Comma-separated categories")
    use_hybrid: Optional[bool] = Field(default=None, description="Combine LLM with TF-IDF results")
    confidence_threshold: Optional[float] = Field(default=None, description="LLM confidence threshold (0-1)")


class BatchClassificationRequestModel(BaseModel):
    """API model for batch classification."""
    texts: Optional[List[str]] = Field(default=None, description="Texts to classify")
    batch_text: Optional[str] = Field(default=None, description="Newline-separated texts to classify")
    categories: Optional[str] = Field(default=None, description="Comma-separated categories")


class TrainingExampleModel(BaseModel):
    """API model for a training example."""
    text: str = Field(..., description="Example text")
    category: str = Field(..., description="Example category")


class SettingsModel(BaseModel):
    """API model for hybrid settings."""
    categories: Optional[str] = Field(default=None, description="Comma-separated categories")
    use_hybrid: Optional[bool] = Field(default=None, description="Combine LLM with TF-IDF results")
    confidence_threshold: Optional[float] = Field(default=None, description="LLM confidence threshold (0-1)")


class ErrorResponse(BaseModel):
    """API model for error responses."""
    error: str = Field(..., description="Error message")
    details: Optional[str] = Field(default=None, description="Error details")
    type: str = Field(default="error", description="Error type")


def handle_api_error(e: Exception) -> JSONResponse:
    """Handle API errors and return appropriate JSON response."""
    if isinstance(e, (InvalidInputError, ValueError)):
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error=str(e),
                type="validation_error"
            ).model_dump()
        )
    elif isinstance(e, ClassifierError):
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error=str(e),
                type="classifier_error"
            ).model_dump()
        )
    else:
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal server error",
                details=str(e),
                type="internal_error"
            ).model_dump()
        )


def current_settings() -> Dict[str, Any]:
    return {"categories": categories, **settings.to_dict()}


# API Endpoints

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "services": {
            "remote_classifier": remote_classifier is not None,
            "training_examples": len(training_set)
        }
    }


@app.post("/classify/text")
async def classify_text(request: ClassificationRequestModel):
    """Classify one text; failures come back as an error result, not an HTTP error."""
    try:
        request_settings = HybridSettings(
            use_hybrid=settings.use_hybrid if request.use_hybrid is None else request.use_hybrid,
            confidence_threshold=(
                settings.confidence_threshold if request.confidence_threshold is None
                else request.confidence_threshold
            )
        )
    except ValueError as e:
        return handle_api_error(e)

    classifier = HybridClassifier(
        remote_classifier=remote_classifier,
        training_set=training_set,
        settings=request_settings
    )
    result = classifier.classify_safe(request.text, request.categories or categories)
    return result.to_dict()


@app.post("/classify/batch")
async def classify_batch_texts(request: BatchClassificationRequestModel):
    """Classify many texts with the LLM, falling back to rules per item."""
    try:
        texts = list(request.texts or [])
        if request.batch_text:
            texts.extend(split_batch_text(request.batch_text))
        if not texts:
            raise InvalidInputError("No texts to classify")

        classifier = HybridClassifier(remote_classifier=remote_classifier, settings=settings)
        return classifier.classify_batch(texts, request.categories or categories).to_dict()
    except Exception as e:
        return handle_api_error(e)


@app.get("/training")
async def list_training_examples():
    """List the training examples in order."""
    return {"examples": training_set.to_list(), "count": len(training_set)}


@app.post("/training")
async def add_training_example(example: TrainingExampleModel):
    """Append a training example."""
    try:
        added = training_set.add(example.text, example.category)
        return {"index": len(training_set) - 1, "example": added.to_dict()}
    except Exception as e:
        return handle_api_error(e)


@app.delete("/training/{index}")
async def delete_training_example(index: int):
    """Delete the training example at a position."""
    try:
        removed = training_set.remove(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"removed": removed.to_dict(), "count": len(training_set)}


@app.get("/settings")
async def get_settings():
    """Get the categories and hybrid settings."""
    return current_settings()


@app.put("/settings")
async def update_settings(update: SettingsModel):
    """Update the categories and hybrid settings."""
    global settings, categories

    try:
        new_settings = HybridSettings(
            use_hybrid=settings.use_hybrid if update.use_hybrid is None else update.use_hybrid,
            confidence_threshold=(
                settings.confidence_threshold if update.confidence_threshold is None
                else update.confidence_threshold
            )
        )
        new_categories = categories
        if update.categories is not None:
            new_categories = ", ".join(parse_categories(update.categories))
    except Exception as e:
        return handle_api_error(e)

    settings = new_settings
    categories = new_categories
    return current_settings()


if __name__ == "__main__":
    import uvicorn

    print("Starting Hybrid Text Classifier API server...")

    uvicorn.run(
        "ui.backend.backend_api:app",
        host=config.api.host,
        port=config.api.port,
        reload=True,
        log_level="info"
    )
