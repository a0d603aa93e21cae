"""Secret redaction for log output."""

import re
from typing import Any, Dict

MASK = "***"

# Name fragments marking a variable or key as sensitive
SENSITIVE_KEY_NAMES = ["pass", "password", "secret", "token", "api_key"]

# Patterns that match the whole secret
SECRET_PATTERNS: list[re.Pattern] = [
    # OpenAI keys (sk-), Anthropic keys (sk-ant-)
    re.compile(r"sk-[a-zA-Z0-9-]{16,}"),
    # GitHub tokens
    re.compile(r"ghp_[A-Za-z0-9]{36}"),
    # AWS keys
    re.compile(r"AKIA[0-9A-Z]{16}"),
]

# KEY=value or KEY: value where the key ends in a sensitive name,
# e.g. APP_DB_PASS=hunter2 or password: "hunter2"
KEY_VALUE_PATTERN = re.compile(
    r"\b([A-Za-z0-9_]*?(?:pass|password|pwd|secret|token|api_key))\s*([:=])\s*(['\"]?)[^'\"\s,]+\3",
    re.IGNORECASE,
)

DB_URL_PATTERN = re.compile(r"([a-zA-Z0-9+]+://[^:/@\s]+:)([^@\s]+)(@)")


def is_sensitive_name(name: str) -> bool:
    """Check if a variable or key name looks like it holds a secret."""
    lowered = name.lower()
    return any(lowered.endswith(fragment) for fragment in SENSITIVE_KEY_NAMES)


def redact_secrets(text: str) -> str:
    """Redact common secret patterns from text.

    Args:
        text: Text that may contain secrets

    Returns:
        Text with secrets replaced by ``***``
    """
    if not text:
        return text

    for pattern in SECRET_PATTERNS:
        text = pattern.sub(MASK, text)

    # Keep the key and separator, mask the value
    text = KEY_VALUE_PATTERN.sub(lambda m: f"{m.group(1)}{m.group(2)}{MASK}", text)

    # Database URLs - redact passwords
    text = DB_URL_PATTERN.sub(rf"\1{MASK}\3", text)

    return text


def redact_mapping(data: Dict[str, Any]) -> Dict[str, Any]:
    """Mask values whose key looks sensitive; other string values are scrubbed."""
    result: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            result[key] = redact_mapping(value)
        elif isinstance(value, str) and value and is_sensitive_name(key):
            result[key] = MASK
        elif isinstance(value, str):
            result[key] = redact_secrets(value)
        else:
            result[key] = value
    return result
