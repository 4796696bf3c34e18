"""Secret redaction utilities.

Remote URLs embed the access token (``https://<token>@github.com/...``),
so anything git prints about a remote can leak it.  Command output and API
error messages pass through ``redact_secrets`` before they are logged or
shown to the operator.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

REDACTED = "<REDACTED>"

_TOKEN_PATTERNS = [
    # GitHub personal access tokens: ghp_xxx or github_pat_xxx
    re.compile(r"gh[pousr]_[A-Za-z0-9]{30,}", re.IGNORECASE),
    re.compile(r"github_pat_[A-Za-z0-9_]{20,}", re.IGNORECASE),
    # Bearer / token authorization values
    re.compile(r"(?<=Authorization: )(?:token|Bearer)\s+\S+", re.IGNORECASE),
]

# Credentials in the userinfo part of a URL
_URL_CREDENTIALS = re.compile(r"(https?://)[^/@\s]+@")

# access_token query parameters
_ACCESS_TOKEN_PARAM = re.compile(r"(access_token=)[^&\s\"']+")


def redact_secrets(text: str, secrets: Iterable[str]) -> str:
    """Return ``text`` with secrets and common token patterns replaced.

    :param text: arbitrary text that may contain secrets
    :param secrets: iterable of secret strings to redact
    :return: redacted text
    """
    redacted = text or ""
    for secret in secrets:
        if secret:
            redacted = redacted.replace(secret, REDACTED)
    redacted = _URL_CREDENTIALS.sub(rf"\1{REDACTED}@", redacted)
    redacted = _ACCESS_TOKEN_PARAM.sub(rf"\1{REDACTED}", redacted)
    for pattern in _TOKEN_PATTERNS:
        redacted = pattern.sub(REDACTED, redacted)
    return redacted
