"""
Exception classes for the hybrid text classifier.
"""


class ClassifierError(Exception):
    """Base exception for classifier errors."""
    pass


class InvalidInputError(ClassifierError):
    """Raised when input text or parameters are invalid."""
    pass


class ConfigurationError(ClassifierError):
    """Raised when configuration is invalid."""
    pass


class ProcessingError(ClassifierError):
    """Raised when classification processing fails."""
    pass


class RemoteClassifierError(ClassifierError):
    """Raised when the remote LLM classifier is unavailable or returns an unusable answer."""
    pass


class TrainingSetError(ClassifierError):
    """Raised when the training set cannot be loaded or saved."""
    pass
