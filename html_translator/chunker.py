"""
Chunker: split sanitized HTML into request-sized pieces.

A document is cut only where a block-level element starts, so no chunk ever
ends inside a tag or in the middle of a paragraph. Segments between block
starts are packed greedily up to a character budget.

Pipeline position: Stage 2 (Sanitizer → Chunker → LLMClient).
Input:  sanitized HTML string + max length
Output: ordered list of Chunk models whose contents concatenate back to
        the input exactly

Structural integrity wins over the budget: a single block longer than the
budget becomes its own oversized chunk rather than being cut.
"""

import re

from .schemas import Chunk
from .logger import get_module_logger

logger = get_module_logger("chunker")

# Start tags treated as safe cut points. The trailing [\s>] keeps <p> from
# matching <pre>, <param>, <picture> and so on.
BLOCK_TAGS = ['p', 'div', 'blockquote', 'h[1-6]', 'li', 'tr', 'section',
              'article', 'figure', 'figcaption', 'pre', 'ul', 'ol', 'table']

BLOCK_START_PATTERN = re.compile(
    r'<(?:' + '|'.join(BLOCK_TAGS) + r')[\s>]',
    re.IGNORECASE
)

DEFAULT_MAX_LENGTH = 3000


def split_points(html: str) -> list[int]:
    """Return the offsets of every block-level start tag in ``html``."""
    return [m.start() for m in BLOCK_START_PATTERN.finditer(html)]


def chunk_html(html: str, max_length: int = DEFAULT_MAX_LENGTH) -> list[str]:
    """
    Split HTML into chunks of at most ``max_length`` characters where possible.

    Never fails: a budget of zero or less simply puts every block in its own
    chunk. Chunker validates the budget once, at construction.

    Args:
        html: Sanitized HTML
        max_length: Character budget per chunk

    Returns:
        Ordered chunk strings; ''.join(result) == html
    """
    points = split_points(html)

    # With zero or one block there is nothing to gain from splitting
    if len(points) < 2:
        return [html]

    chunks: list[str] = []
    current = ""

    for i, start in enumerate(points):
        end = points[i + 1] if i + 1 < len(points) else len(html)
        segment = html[start:end]

        if current and len(current) + len(segment) > max_length:
            chunks.append(current)
            current = segment
        else:
            current += segment

    chunks.append(current)

    # Text before the first block (stray prologue, whitespace) rides along
    # with the first chunk instead of being dropped.
    prologue = html[:points[0]]
    if prologue:
        chunks[0] = prologue + chunks[0]

    return chunks


class Chunker:
    """Splits sanitized HTML into indexed Chunk models."""

    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH):
        if max_length <= 0:
            raise ValueError("max_length must be positive")
        self.max_length = max_length

    def split(self, html: str) -> list[Chunk]:
        """Split HTML into Chunk models, logging any oversized blocks."""
        pieces = chunk_html(html, self.max_length)
        chunks = [Chunk(index=i, content=piece) for i, piece in enumerate(pieces)]

        oversized = [c.index for c in chunks if c.length > self.max_length]
        if oversized and len(chunks) > 1:
            logger.warning(
                f"{len(oversized)} chunk(s) exceed {self.max_length} chars "
                f"because a single block is larger than the budget: {oversized}"
            )

        logger.info(
            f"Split {len(html)} chars into {len(chunks)} chunk(s) "
            f"(max_length={self.max_length})"
        )
        return chunks
