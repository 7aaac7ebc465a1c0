"""
JSON export of classification results.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from .models.data_models import BatchResult, ClassificationErrorResult, ClassificationResult
from .exceptions import ProcessingError


logger = logging.getLogger(__name__)

ExportableResult = Union[ClassificationResult, ClassificationErrorResult, BatchResult]


def results_to_json(result: ExportableResult, indent: Optional[int] = None) -> str:
    """Serialize a single, error or batch result to a JSON string."""
    from .config import config

    return json.dumps(
        result.to_dict(),
        indent=config.export.json_indent if indent is None else indent,
        ensure_ascii=False
    )


def save_results(result: ExportableResult, filepath: Optional[Union[str, Path]] = None) -> Path:
    """
    Write a result to a JSON file.

    Args:
        result: Result to export
        filepath: Target file (defaults to the configured file name in the working directory)

    Returns:
        Path of the written file

    Raises:
        ProcessingError: If the file cannot be written
    """
    from .config import config

    path = Path(filepath) if filepath is not None else Path(config.export.default_filename)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(results_to_json(result), encoding='utf-8')
    except OSError as e:
        raise ProcessingError(f"Failed to export results: {e}")

    logger.info(f"Exported classification results to {path}")
    return path
