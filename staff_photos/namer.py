"""Name parser module - derives a display name and optional job title from a photo filename."""

from typing import Optional, Tuple
import logging

logger = logging.getLogger(__name__)

# Marks the start of the job title in "Jane Doe - Manager"
SEPARATOR = ' - '


def parse_filename(stem: str) -> Tuple[str, Optional[str]]:
    """
    Split a filename stem into name and job title.

    The split happens at the last occurrence of SEPARATOR, so
    "A - B - C" gives ("A - B", "C"). Both parts are kept verbatim;
    a stem starting or ending with the separator yields an empty
    name or an empty job title.

    Args:
        stem: Filename without extension

    Returns:
        Tuple of (name, job_title), job_title is None when the stem
        carries no separator
    """
    index = stem.rfind(SEPARATOR)
    if index == -1:
        return stem, None

    name = stem[:index]
    job_title = stem[index + len(SEPARATOR):]
    logger.debug(f"Parsed '{stem}' as name='{name}', job_title='{job_title}'")
    return name, job_title
