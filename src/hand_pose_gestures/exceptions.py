"""Custom exception hierarchy for gesture classification and overlay errors."""


class HandPoseError(Exception):
    """Base exception for package errors."""


class InvalidInputError(HandPoseError, ValueError):
    """Raised when a caller violates an input precondition."""


class ParseError(HandPoseError):
    """Raised when detector observations cannot be parsed."""


class ConfigurationError(HandPoseError):
    """Raised when configuration values are invalid."""


class DetectionFailedError(HandPoseError):
    """Raised when the hand-pose detector fails for one frame."""


class ProcessorError(HandPoseError):
    """Base exception for frame processor errors."""


class ProcessorCallbackError(ProcessorError):
    """Raised when a user callback invoked by the processor fails."""


class VisualizationDependencyError(HandPoseError):
    """Raised when optional visualization dependencies are missing."""
