"""
System configuration for the hybrid text classifier backend.
Contains AWS regions, model IDs, and other system-level settings.
"""

import os
from dataclasses import dataclass, field


@dataclass
class AWSConfig:
    """AWS-related configuration settings."""
    bedrock_region: str = "us-west-2"
    classification_model: str = "us.amazon.nova-lite-v1:0"

    @classmethod
    def from_env(cls) -> 'AWSConfig':
        """Create AWS config from environment variables."""
        return cls(
            bedrock_region=os.getenv('AWS_BEDROCK_REGION', cls.bedrock_region),
            classification_model=os.getenv('AWS_CLASSIFICATION_MODEL', cls.classification_model),
        )


@dataclass
class APIConfig:
    """API-related configuration settings."""
    cors_origins: list = field(default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"])
    host: str = "127.0.0.1"
    port: int = 8000
    enable_remote_classifier: bool = True
    training_set_path: str = ""

    @classmethod
    def from_env(cls) -> 'APIConfig':
        """Create API config from environment variables."""
        cors_origins = os.getenv('API_CORS_ORIGINS', ','.join(cls().cors_origins)).split(',')
        return cls(
            cors_origins=[origin.strip() for origin in cors_origins],
            host=os.getenv('API_HOST', cls.host),
            port=int(os.getenv('API_PORT', cls.port)),
            enable_remote_classifier=os.getenv('API_ENABLE_REMOTE_CLASSIFIER', 'true').lower() in ('1', 'true', 'yes'),
            training_set_path=os.getenv('API_TRAINING_SET_PATH', cls.training_set_path),
        )


@dataclass
class SystemConfig:
    """Main system configuration container."""
    aws: AWSConfig = field(default_factory=AWSConfig)
    api: APIConfig = field(default_factory=APIConfig)

    @classmethod
    def from_env(cls) -> 'SystemConfig':
        """Create system config from environment variables."""
        return cls(
            aws=AWSConfig.from_env(),
            api=APIConfig.from_env(),
        )


# Global configuration instance
config = SystemConfig.from_env()
