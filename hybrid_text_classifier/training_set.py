"""
Training set for the TF-IDF similarity matcher.

The training set is owned by the caller and passed into each classification
call; the classifier never mutates it.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from .models.data_models import TrainingExample
from .exceptions import TrainingSetError


logger = logging.getLogger(__name__)


class TrainingSet:
    """Ordered, append/remove-only collection of labeled examples."""

    def __init__(self, examples: Optional[Iterable[Union[TrainingExample, Dict[str, Any]]]] = None):
        self._examples: List[TrainingExample] = []
        for example in examples or []:
            if isinstance(example, TrainingExample):
                self._examples.append(example)
            else:
                self.add(example.get("text", ""), example.get("category", ""))

    def __len__(self) -> int:
        return len(self._examples)

    def __iter__(self) -> Iterator[TrainingExample]:
        return iter(list(self._examples))

    def __getitem__(self, index: int) -> TrainingExample:
        return self._examples[index]

    def __bool__(self) -> bool:
        return bool(self._examples)

    @property
    def texts(self) -> List[str]:
        return [example.text for example in self._examples]

    @property
    def categories(self) -> List[str]:
        return [example.category for example in self._examples]

    def add(self, text: str, category: str) -> TrainingExample:
        """
        Append a labeled example.

        Raises:
            ValueError: If text or category is empty
        """
        example = TrainingExample(text=text, category=category)
        self._examples.append(example)
        logger.debug(f"Added training example #{len(self._examples) - 1} for category '{example.category}'")
        return example

    def remove(self, index: int) -> TrainingExample:
        """
        Delete the example at the given position.

        Raises:
            IndexError: If no example exists at that position
        """
        if index < 0 or index >= len(self._examples):
            raise IndexError(f"No training example at index {index}")
        return self._examples.pop(index)

    def clear(self) -> None:
        self._examples.clear()

    def to_list(self) -> List[Dict[str, str]]:
        return [example.to_dict() for example in self._examples]

    @classmethod
    def load(cls, filepath: Union[str, Path]) -> 'TrainingSet':
        """
        Load a training set from a JSON file.

        The file holds either a list of {"text", "category"} objects or an object
        with an "examples" list.

        Args:
            filepath: Path to the JSON file

        Returns:
            TrainingSet with the file's examples in order

        Raises:
            TrainingSetError: If the file is missing, unreadable or malformed
        """
        path = Path(filepath)
        if not path.exists():
            raise TrainingSetError(f"Training set file not found: {filepath}")

        if not path.is_file():
            raise TrainingSetError(f"Path is not a file: {filepath}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise TrainingSetError(f"Invalid JSON in training set file: {str(e)}")
        except OSError as e:
            raise TrainingSetError(f"Failed to read training set file: {str(e)}")

        if isinstance(data, dict):
            data = data.get("examples")

        if not isinstance(data, list):
            raise TrainingSetError("Training set must be a list of examples or an object with an 'examples' list")

        training_set = cls()
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                raise TrainingSetError(f"Example {i} must be a JSON object")
            if "text" not in item or "category" not in item:
                raise TrainingSetError(f"Example {i} missing required 'text' or 'category' field")
            try:
                training_set.add(item["text"], item["category"])
            except ValueError as e:
                raise TrainingSetError(f"Invalid example {i}: {str(e)}")

        logger.info(f"Loaded {len(training_set)} training examples from {filepath}")
        return training_set

    def save(self, filepath: Union[str, Path]) -> None:
        """
        Save the training set to a JSON file.

        Raises:
            TrainingSetError: If the file cannot be written
        """
        from .config import config

        path = Path(filepath)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump({"examples": self.to_list()}, f, indent=config.export.json_indent, ensure_ascii=False)
        except OSError as e:
            raise TrainingSetError(f"Failed to save training set: {str(e)}")

        logger.info(f"Saved {len(self)} training examples to {filepath}")
