"""
Sanitizer: string-level HTML cleanup before content leaves the process.

Removes presentation/scripting hooks that carry no meaning for a translator
(class, style, id, role, data-*, aria-*) and collapses whitespace runs. The
fewer characters sent, the more content fits into each chunk and the less
the request costs.

Pipeline position: Stage 1 (Sanitizer → Chunker → LLMClient).
Input:  raw HTML string
Output: sanitized HTML string

Design principle: NEVER FAIL. This is a pure, total function; tag names,
untargeted attributes and text are left alone. sanitize(sanitize(x)) equals
sanitize(x).
"""

import re

from .logger import get_module_logger

logger = get_module_logger("sanitizer")


class Sanitizer:
    """Regex-based attribute stripper and whitespace collapser."""

    # Attributes with no meaning outside the page's own CSS/JS
    STRIPPED_ATTRIBUTES = r'(?:class|style|id|role|data-[\w.:-]+|aria-[\w.:-]+)'

    # A start tag, letting quoted attribute values contain '>'
    START_TAG_PATTERN = re.compile(
        r'<[a-zA-Z](?:"[^"]*"|\'[^\']*\'|[^\'">])*>'
    )

    # Group 1 swallows every quoted value whole, so text such as
    # title="a class=b" is never mistaken for a class attribute.
    ATTRIBUTE_PATTERN = re.compile(
        r'("[^"]*"|\'[^\']*\')'
        r'|\s+' + STRIPPED_ATTRIBUTES +
        r'\s*=\s*(?:"[^"]*"|\'[^\']*\'|[^\s"\'=<>`]+)',
        re.IGNORECASE
    )

    WHITESPACE_PATTERN = re.compile(r'\s+')

    def sanitize(self, html: str) -> str:
        """
        Strip targeted attributes from every start tag, then collapse
        whitespace (newlines included) to single spaces.

        Args:
            html: Raw HTML string

        Returns:
            Sanitized HTML string
        """
        original_length = len(html)

        # Attribute removal is confined to start tags so prose such as
        # 'set class="x" here' inside a <code> block survives untouched.
        cleaned = self.START_TAG_PATTERN.sub(self._strip_tag, html)
        cleaned = self.WHITESPACE_PATTERN.sub(' ', cleaned)

        logger.debug(f"Sanitized HTML: {original_length} -> {len(cleaned)} chars")
        return cleaned

    def _strip_tag(self, match: re.Match) -> str:
        tag = match.group(0)

        # Repeat until nothing matches: removing one attribute can expose
        # another that was glued to it without whitespace (data-a="1"class="x").
        while True:
            stripped = self.ATTRIBUTE_PATTERN.sub(
                lambda m: self._replacement(m, tag), tag
            )
            if stripped == tag:
                return stripped
            tag = stripped

    @staticmethod
    def _replacement(match: re.Match, tag: str) -> str:
        if match.group(1) is not None:
            return match.group(1)

        # Keep a separator when the next attribute follows without whitespace,
        # otherwise '<p id="a"title="b">' would become '<ptitle="b">'.
        following = tag[match.end():match.end() + 1]
        if following and not following.isspace() and following not in '/>':
            return ' '
        return ''


_default_sanitizer = Sanitizer()


def sanitize(html: str) -> str:
    """Convenience function to sanitize HTML with the default Sanitizer."""
    return _default_sanitizer.sanitize(html)
