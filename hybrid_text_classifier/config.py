"""
Configuration for the hybrid text classifier library.
Independent of UI backend configuration.
"""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AWSConfig:
    """AWS-related configuration settings."""
    bedrock_region: str = "us-west-2"

    # Model used by the remote classifier
    default_model: str = "us.amazon.nova-lite-v1:0"

    @classmethod
    def from_env(cls) -> 'AWSConfig':
        """Create AWS config from environment variables."""
        return cls(
            bedrock_region=os.getenv('AWS_BEDROCK_REGION', cls.bedrock_region),
            default_model=os.getenv('AWS_DEFAULT_MODEL', cls.default_model),
        )


@dataclass
class RemoteClassifierConfig:
    """Configuration for the remote LLM classifier."""
    temperature: float = 0.1
    max_tokens: int = 500

    # Single attempt, no retries
    max_attempts: int = 1
    read_timeout: int = 30
    connect_timeout: int = 10

    @classmethod
    def from_env(cls) -> 'RemoteClassifierConfig':
        """Create remote classifier config from environment variables."""
        return cls(
            temperature=float(os.getenv('REMOTE_TEMPERATURE', cls.temperature)),
            max_tokens=int(os.getenv('REMOTE_MAX_TOKENS', cls.max_tokens)),
            read_timeout=int(os.getenv('REMOTE_READ_TIMEOUT', cls.read_timeout)),
            connect_timeout=int(os.getenv('REMOTE_CONNECT_TIMEOUT', cls.connect_timeout)),
        )


@dataclass
class FusionConfig:
    """Configuration for the hybrid decision policy."""
    default_categories: str = "positive, negative, neutral"
    use_hybrid: bool = True
    confidence_threshold: float = 0.7

    # Minimum TF-IDF confidence for the agreement rule
    traditional_agreement_min: float = 0.5

    @classmethod
    def from_env(cls) -> 'FusionConfig':
        """Create fusion config from environment variables."""
        return cls(
            default_categories=os.getenv('FUSION_DEFAULT_CATEGORIES', cls.default_categories),
            use_hybrid=_env_bool('FUSION_USE_HYBRID', cls.use_hybrid),
            confidence_threshold=float(os.getenv('FUSION_CONFIDENCE_THRESHOLD', cls.confidence_threshold)),
            traditional_agreement_min=float(
                os.getenv('FUSION_TRADITIONAL_AGREEMENT_MIN', cls.traditional_agreement_min)
            ),
        )


@dataclass
class RuleConfig:
    """Configuration for the lexical rule scorer."""
    max_confidence: float = 0.85
    default_confidence: float = 0.5
    negation_window: int = 3
    exclamation_weight: float = 0.3
    question_weight: float = 0.2

    @classmethod
    def from_env(cls) -> 'RuleConfig':
        """Create rule config from environment variables."""
        return cls(
            max_confidence=float(os.getenv('RULE_MAX_CONFIDENCE', cls.max_confidence)),
            default_confidence=float(os.getenv('RULE_DEFAULT_CONFIDENCE', cls.default_confidence)),
            negation_window=int(os.getenv('RULE_NEGATION_WINDOW', cls.negation_window)),
            exclamation_weight=float(os.getenv('RULE_EXCLAMATION_WEIGHT', cls.exclamation_weight)),
            question_weight=float(os.getenv('RULE_QUESTION_WEIGHT', cls.question_weight)),
        )


@dataclass
class BatchConfig:
    """Configuration for batch classification."""
    max_workers: int = 1

    @classmethod
    def from_env(cls) -> 'BatchConfig':
        """Create batch config from environment variables."""
        return cls(
            max_workers=int(os.getenv('BATCH_MAX_WORKERS', cls.max_workers)),
        )


@dataclass
class ExportConfig:
    """Configuration for exporting results and training data."""
    default_filename: str = "classification_results.json"
    json_indent: int = 2

    @classmethod
    def from_env(cls) -> 'ExportConfig':
        """Create export config from environment variables."""
        return cls(
            default_filename=os.getenv('EXPORT_DEFAULT_FILENAME', cls.default_filename),
            json_indent=int(os.getenv('EXPORT_JSON_INDENT', cls.json_indent)),
        )


@dataclass
class ClassifierConfig:
    """Configuration for the hybrid text classifier library."""
    aws: AWSConfig = field(default_factory=AWSConfig)
    remote: RemoteClassifierConfig = field(default_factory=RemoteClassifierConfig)
    fusion: FusionConfig = field(default_factory=FusionConfig)
    rules: RuleConfig = field(default_factory=RuleConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    @classmethod
    def from_env(cls) -> 'ClassifierConfig':
        """Create classifier config from environment variables."""
        return cls(
            aws=AWSConfig.from_env(),
            remote=RemoteClassifierConfig.from_env(),
            fusion=FusionConfig.from_env(),
            rules=RuleConfig.from_env(),
            batch=BatchConfig.from_env(),
            export=ExportConfig.from_env(),
        )


# Global configuration instance
config = ClassifierConfig.from_env()
