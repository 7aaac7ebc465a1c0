"""
Prompt templates for the hybrid text classifier library.
Contains all LLM prompts used throughout the system.
"""

from typing import Sequence


class ClassificationPrompts:
    """Prompts for single-label LLM classification."""

    @staticmethod
    def system_prompt() -> str:
        """System prompt for the classification agent."""
        return "You are a precise text classifier. You always answer with a single JSON object and nothing else."

    @staticmethod
    def classification_prompt(text: str, categories: Sequence[str]) -> str:
        """Generate prompt asking the model to pick exactly one category."""
        return f"""You are a precise text classifier. Classify the following text into exactly ONE of these categories: {', '.join(categories)}.

Text to classify: "{text}"

Respond ONLY with a JSON object in this exact format:
{{
  "category": "the_chosen_category",
  "confidence": 0.95,
  "reasoning": "brief explanation"
}}"""
