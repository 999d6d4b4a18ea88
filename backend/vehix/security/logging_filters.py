"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+"
    r"|access_token\"\s*:\s*\"[^\"]+\""
    r"|(?:temporary_)?password\"\s*:\s*\"[^\"]+\""
    r"|password_hash\"\s*:\s*\"[^\"]+\""
    r"|\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53})",
    re.IGNORECASE,
)


class SensitiveFilter(logging.Filter):
    """Replace tokens, passwords and bcrypt hashes with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _SENSITIVE_PATTERN.sub("**REDACTED**", record.msg)
        return True


def install_sensitive_filter(*logger_names: str) -> None:
    """Attach ``SensitiveFilter`` once to each named logger."""
    for name in logger_names:
        target = logging.getLogger(name)
        if not any(isinstance(flt, SensitiveFilter) for flt in target.filters):
            target.addFilter(SensitiveFilter())


__all__ = ["SensitiveFilter", "install_sensitive_filter"]
