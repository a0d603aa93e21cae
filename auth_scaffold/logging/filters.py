"""Logging filter for automatic secret redaction."""

import logging

from ..utils.redaction import redact_secrets


class RedactionFilter(logging.Filter):
    """Automatically redact secrets from log messages."""

    MAX_REDACTION_SIZE = 8 * 1024  # 8KB - skip expensive regex on large messages

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log records to redact secrets.

        Args:
            record: The log record to filter

        Returns:
            True (always allows the record through after redaction)
        """
        if len(str(record.msg)) > self.MAX_REDACTION_SIZE:
            return True

        record.msg = redact_secrets(str(record.msg))

        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    k: redact_secrets(v) if isinstance(v, str) else v
                    for k, v in record.args.items()
                }
            else:
                record.args = tuple(
                    redact_secrets(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )

        return True
