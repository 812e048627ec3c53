"""Text processing helpers for blog posts."""

from math import ceil
from re import sub
from unicodedata import normalize

from blogapi.configs import settings
from blogapi.configs.settings import MAX_SLUG_LENGTH


def slugify(title: str) -> str:
    """
    Build a URL-friendly slug from a title.

    Accented characters are folded to ASCII, anything that is not a letter,
    digit, whitespace or hyphen is dropped, and runs of whitespace or hyphens
    collapse into a single hyphen. Folding can lengthen the text (a
    ligature expands to two letters), so the result is cut to
    ``MAX_SLUG_LENGTH``.

    Args:
        title: Blog title

    Returns:
        str: Lowercase slug, empty when the title has no usable characters
    """
    ascii_title = normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    slug = ascii_title.lower()
    slug = sub(r"[^a-z0-9\s-]", "", slug)
    slug = sub(r"[\s-]+", "-", slug).strip("-")
    return slug[:MAX_SLUG_LENGTH].rstrip("-")


def calculate_word_count(body: str) -> int:
    """
    Calculate word count from a post body.

    Args:
        body: Blog body

    Returns:
        int: Word count
    """
    return len(body.split())


def calculate_reading_time(body: str, words_per_minute: int | None = None) -> int:
    """
    Estimate the reading time of a post body in minutes.

    Assumes an average reading speed of ``WORDS_PER_MINUTE`` (200 by default).

    Args:
        body: Blog body
        words_per_minute: Optional override of the configured reading speed

    Returns:
        int: Reading time in minutes (minimum 1)
    """
    speed = words_per_minute or settings.WORDS_PER_MINUTE
    return max(1, ceil(calculate_word_count(body) / speed))
