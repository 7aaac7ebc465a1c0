"""
LLM-based classification through a hosted Bedrock model.
"""

import logging
import json
import math
from typing import Any, Dict, Optional, Sequence
from botocore.config import Config
from strands import Agent
from strands.models import BedrockModel
from hybrid_text_classifier.models.data_models import ClassificationResult, METHOD_LLM
from hybrid_text_classifier.services.interfaces import RemoteClassifierInterface
from hybrid_text_classifier.exceptions import (
    ConfigurationError,
    RemoteClassifierError
)


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("category", "confidence", "reasoning")


def _balanced_object_end(text: str, start: int) -> int:
    """Index just past the '}' closing the object opened at start, or -1."""
    depth = 0
    in_string = False
    escaped = False
    for pos in range(start, len(text)):
        char = text[pos]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return pos + 1
    return -1


def extract_json_object(response_text: str) -> Dict[str, Any]:
    """
    Extract the first well-formed JSON object embedded in a model response.

    Leading and trailing prose (or markdown fences) around the object is ignored.

    Args:
        response_text: Raw text returned by the model

    Returns:
        The parsed JSON object

    Raises:
        RemoteClassifierError: If no balanced, parseable object is found
    """
    start = response_text.find("{")
    while start != -1:
        end = _balanced_object_end(response_text, start)
        if end == -1:
            break
        try:
            parsed = json.loads(response_text[start:end])
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, dict):
            return parsed
        start = response_text.find("{", start + 1)

    raise RemoteClassifierError("No JSON object found in LLM response")


def _match_category(answer: str, categories: Sequence[str]) -> str:
    """Map the model's answer onto a configured label, ignoring case."""
    for category in categories:
        if category == answer:
            return category
    for category in categories:
        if category.lower() == answer.lower():
            return category
    raise RemoteClassifierError(f"LLM answered unknown category '{answer}'")


def parse_classification_response(
    response_text: str,
    categories: Optional[Sequence[str]] = None
) -> ClassificationResult:
    """
    Turn a raw model response into a ClassificationResult.

    Args:
        response_text: Raw text returned by the model
        categories: If given, the answer must name one of these labels

    Raises:
        RemoteClassifierError: If the JSON is absent, malformed, misses a field
            or names a category outside the given labels
    """
    parsed = extract_json_object(response_text)

    missing = [name for name in REQUIRED_FIELDS if name not in parsed]
    if missing:
        raise RemoteClassifierError(f"Missing {missing} in LLM response")

    category = parsed["category"]
    confidence = parsed["confidence"]
    reasoning = parsed["reasoning"]

    if not isinstance(category, str) or not category.strip():
        raise RemoteClassifierError("'category' must be a non-empty string")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise RemoteClassifierError("'confidence' must be a number")
    try:
        confidence = float(confidence)
    except OverflowError:
        raise RemoteClassifierError("'confidence' must be a finite number")
    if not math.isfinite(confidence):
        raise RemoteClassifierError("'confidence' must be a finite number")
    if not isinstance(reasoning, str):
        raise RemoteClassifierError("'reasoning' must be a string")

    category = category.strip()
    if categories:
        category = _match_category(category, categories)

    return ClassificationResult(
        category=category,
        confidence=min(max(confidence, 0.0), 1.0),
        method=METHOD_LLM,
        reasoning=reasoning
    )


class LLMClassifier(RemoteClassifierInterface):
    """
    Remote classifier backed by a Strands agent over a Bedrock model.

    One request per classification, no retries: any failure is reported as
    RemoteClassifierError so callers can fall back to local methods.
    """

    def __init__(
        self,
        model_id: Optional[str] = None,
        aws_region: Optional[str] = None,
        model_parameters: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the LLM classifier.

        Args:
            model_id: Bedrock model ID (defaults to config value)
            aws_region: Bedrock region (defaults to config value)
            model_parameters: Optional overrides for temperature and max_tokens

        Raises:
            ConfigurationError: If parameters are invalid or the agent cannot be created
        """
        from .config import config

        self.model_id = model_id or config.aws.default_model
        self.aws_region = aws_region or config.aws.bedrock_region
        self.model_parameters = {
            "temperature": config.remote.temperature,
            "max_tokens": config.remote.max_tokens,
            **(model_parameters or {})
        }
        self._validate_model_parameters()
        self._initialize_strands_agent()

        logger.info(f"Initialized LLMClassifier with model: {self.model_id}")

    def _validate_model_parameters(self) -> None:
        params = self.model_parameters
        if not (0.0 <= params["temperature"] <= 1.0):
            raise ConfigurationError("LLM temperature must be between 0.0 and 1.0")
        if params["max_tokens"] <= 0:
            raise ConfigurationError("LLM max_tokens must be positive")

    def _initialize_strands_agent(self) -> None:
        """Initialize Strands agent for classification."""
        from .config import config
        from .prompts import ClassificationPrompts

        try:
            boto_config = Config(
                retries={
                    'max_attempts': config.remote.max_attempts,
                    'mode': 'standard'
                },
                read_timeout=config.remote.read_timeout,
                connect_timeout=config.remote.connect_timeout
            )

            model = BedrockModel(
                model_id=self.model_id,
                region_name=self.aws_region,
                boto_client_config=boto_config,
                temperature=self.model_parameters["temperature"],
                max_tokens=self.model_parameters["max_tokens"]
            )

            self.agent = Agent(
                model=model,
                system_prompt=ClassificationPrompts.system_prompt(),
                callback_handler=None
            )
        except Exception as e:
            raise ConfigurationError(f"Failed to initialize Strands agent: {e}")

    def classify(self, text: str, categories: Sequence[str]) -> ClassificationResult:
        """
        Ask the model to pick exactly one category.

        Raises:
            RemoteClassifierError: On transport failure or an unusable answer
        """
        from .prompts import ClassificationPrompts

        logger.info(f"Calling LLM ({self.model_id}) for classification")

        try:
            prompt = ClassificationPrompts.classification_prompt(text, categories)
            response = self.agent(prompt)
            response_text = response.message['content'][0]['text']
        except Exception as e:
            logger.error(f"LLM classification request failed: {e}")
            raise RemoteClassifierError(f"LLM classification failed: {e}")

        logger.debug(f"LLM response: {response_text}")

        return parse_classification_response(response_text, categories)

    def get_config_summary(self) -> Dict[str, Any]:
        return {
            "model_id": self.model_id,
            "aws_region": self.aws_region,
            "model_parameters": dict(self.model_parameters)
        }
