"""
Exception hierarchy for ai-dev-env.

Installers never raise for an individual failed step; these exceptions mark
problems at the loading and parsing seams.
"""

from __future__ import annotations


class AiDevEnvError(Exception):
    """
    Base exception for ai-dev-env errors.

    Attributes:
        message: Human-readable error message
        remediation: Suggested fix for the error
    """
    def __init__(self, message: str, remediation: str | None = None):
        self.message = message
        self.remediation = remediation
        super().__init__(message)


class CatalogError(AiDevEnvError):
    """The tool catalog is missing or malformed."""


class ConfigError(AiDevEnvError):
    """A user configuration file could not be loaded."""


class TemplateError(AiDevEnvError):
    """An app install template lacks a required field."""
