"""Policies applied to command output and error messages."""

from .redaction import redact_secrets

__all__ = ["redact_secrets"]
