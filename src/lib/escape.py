"""
HTML escaping for decoded message text

text_escape() must be applied exactly once to raw text: escaping already
escaped text double-escapes its ampersands.
"""

_ESCAPE_TABLE = str.maketrans({
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#039;',
})


def text_escape(text: str) -> str:
    """
    Escape the characters & < > " ' for safe embedding in HTML

    Args:
        text: Raw text

    Returns:
        Text with the five special characters replaced by character references

    Example:
        >>> text_escape("<script>")
        '&lt;script&gt;'
        >>> text_escape("it's")
        'it&#039;s'
    """
    return text.translate(_ESCAPE_TABLE)
