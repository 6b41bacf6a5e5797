"""
Utility functions for the application.
"""
import re
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from markupsafe import Markup

EMAIL_REGEX = re.compile(
    r'(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))'
    r'@'
    r'((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))'
)

MIN_PASSWORD_LENGTH = 8

_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_TAG_RE = re.compile(r"<.*?>", re.DOTALL)


def is_valid_email(email: str) -> bool:
    """
    Check an email address against a mailbox pattern.

    The match is case-sensitive and covers the whole string.

    Examples:
        >>> is_valid_email('jane@example.com')
        True
        >>> is_valid_email('jane@example')
        False
    """
    return bool(email) and EMAIL_REGEX.fullmatch(email) is not None


def sanitize(value: Optional[str]) -> str:
    """
    Strip HTML tags and comments from user supplied text before it is stored.

    Entities are unescaped after each pass and the strip repeats until the
    text stops changing, so entity-encoded tags are removed as well. The
    result is plain text that the templates escape again when rendering.
    Whitespace is kept as typed.

    Examples:
        >>> sanitize('<b>Jane</b>')
        'Jane'
        >>> sanitize('&lt;script&gt;alert(1)&lt;/script&gt;Springfield')
        'alert(1)Springfield'
        >>> sanitize('New   York')
        'New   York'
    """
    if not value:
        return ''
    text = value
    while True:
        stripped = _TAG_RE.sub('', _COMMENT_RE.sub('', text))
        cleaned = Markup(stripped).unescape()
        if cleaned == text:
            return cleaned
        text = cleaned


def sort_projects_by_creation_date(projects: Iterable) -> List:
    """Newest project first; projects created at the same moment keep the higher id first."""
    return sorted(projects, key=lambda p: (p.date or datetime.min, p.id or 0), reverse=True)


def format_long_date(value: Optional[datetime]) -> str:
    """
    Format a date the long en-US way.

    Examples:
        >>> format_long_date(datetime(2026, 10, 9))
        'October 9, 2026'
    """
    if value is None:
        return ''
    return f"{value:%B} {value.day}, {value.year}"


def format_number(value) -> str:
    """
    Format a number with thousands separators and at most three decimals.

    Examples:
        >>> format_number(1234567)
        '1,234,567'
        >>> format_number(1234.5)
        '1,234.5'
        >>> format_number(None)
        '0'
    """
    if value is None:
        return '0'
    if isinstance(value, (float, Decimal)) and value != int(value):
        return f"{value:,.3f}".rstrip('0').rstrip('.')
    return f"{int(value):,}"


def project_view(project) -> dict:
    """Display fields of a project for the listing, detail and history pages."""
    return {
        'id': project.id,
        'title': project.title,
        'description': project.description,
        'creator': project.creator.display_name if project.creator else '',
        'date': format_long_date(project.date),
        'pledge_goal': format_number(project.pledge_goal),
        'collected': format_number(project.collected),
        'donors': len(project.donations),
    }
