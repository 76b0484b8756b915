"""Rejects request values that look like SQL injection or script injection payloads.

Queries go through SQLAlchemy bound parameters, so these checks are not what keeps
the database safe. They exist so obviously hostile input is refused at the edge
and never stored or echoed back to browsers.
"""

import re

SQL_INJECTION_MESSAGE = "SQL injection attempt detected"
XSS_MESSAGE = "XSS attempt detected"

SQL_METACHARACTERS = re.compile(r"('|\"|;|--|/\*|\*/|#|\\)")
SQL_KEYWORD_PATTERNS = re.compile(
    r"\b("
    r"union\s+(all\s+)?select"
    r"|select\s+.+\s+from"
    r"|insert\s+into"
    r"|update\s+\w+\s+set"
    r"|delete\s+from"
    r"|drop\s+(table|database)"
    r"|truncate\s+table"
    r"|alter\s+table"
    r"|exec(ute)?\s*\("
    r"|(or|and)\s+\d+\s*=\s*\d+"
    r"|sleep\s*\(\s*\d+\s*\)"
    r")",
    re.IGNORECASE,
)
MARKUP_PATTERNS = re.compile(
    r"(<\s*/?\s*[a-z!][^>]*>"
    r"|<\s*script"
    r"|javascript\s*:"
    r"|vbscript\s*:"
    r"|data\s*:\s*text/html"
    r"|\bon[a-z]+\s*="
    r")",
    re.IGNORECASE,
)


def contains_sql_injection(value: str) -> bool:
    return bool(SQL_METACHARACTERS.search(value) or SQL_KEYWORD_PATTERNS.search(value))


def contains_markup(value: str) -> bool:
    return bool(MARKUP_PATTERNS.search(value))


def screen_value(value: str) -> str | None:
    """Return the rejection message for a hostile value, or None when it is clean.

    Markup is checked first so a payload such as ``<script>alert('x')</script>``
    is reported as XSS even though it also carries quotes.
    """
    if contains_markup(value):
        return XSS_MESSAGE
    if contains_sql_injection(value):
        return SQL_INJECTION_MESSAGE
    return None
