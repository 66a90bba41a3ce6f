"""
Input Sanitization Module

Sanitizes user-supplied text before it is stored, so names and notes
are returned to clients as inert text.
"""

import html
import re

CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')


def _escape_truncated(text, max_length):
    """
    HTML-escape text, keeping at most max_length escaped characters.

    Stops before a character whose entity would not fit, so the result
    never ends in a partial entity such as "&am".
    """
    escaped = html.escape(text)
    if len(escaped) <= max_length:
        return escaped

    parts = []
    length = 0
    for char in text:
        piece = html.escape(char)
        if length + len(piece) > max_length:
            break
        parts.append(piece)
        length += len(piece)
    return ''.join(parts)


def sanitize_text(text, max_length=10000):
    """
    Sanitize single-line text by HTML-escaping special characters.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    # Strip whitespace and control characters
    text = CONTROL_CHARS.sub('', text.strip())

    # Collapse runs of whitespace (names are single-line)
    text = re.sub(r'\s+', ' ', text)

    # HTML escape special characters, truncating to max_length
    return _escape_truncated(text, max_length)


def sanitize_instructions(instructions, max_length=50000):
    """
    Sanitize recipe instructions or order notes.

    Preserves newlines for formatting but escapes HTML.

    Args:
        instructions: The instructions text
        max_length: Maximum allowed length (default 50000)

    Returns:
        Sanitized instructions
    """
    if not instructions:
        return ''

    if not isinstance(instructions, str):
        instructions = str(instructions)

    instructions = CONTROL_CHARS.sub('', instructions.strip())

    # HTML escape (this will escape < > & etc.)
    return _escape_truncated(instructions, max_length)
