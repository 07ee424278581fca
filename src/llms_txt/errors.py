"""Exceptions raised while configuring or loading a specification."""


class LlmsTxtError(Exception):
    """Base class for all llms-txt errors."""


class ConfigurationError(LlmsTxtError):
    """Options are inconsistent, e.g. a ``file`` source without a path."""


class SpecLoadError(LlmsTxtError):
    """The OpenAPI document could not be read, fetched or parsed."""
