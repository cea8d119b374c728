"""
Full-file source range resolution.
"""
import os

from .errors import LocationResolutionError, RangeConstructionError
from .logger import get_logger
from .translation_unit import SourceRange, TranslationUnit

logger = get_logger()


def get_file_size(file_name: str) -> int:
    """File size in bytes, as reported by the file system."""
    return os.stat(file_name).st_size


def resolve_range(unit: TranslationUnit, file_name: str) -> SourceRange:
    """
    Compute the range covering the whole file, from offset 0 to its size.

    Raises:
        LocationResolutionError: the file is not part of the unit, or one of
            the two offsets cannot be resolved in it
        RangeConstructionError: the two locations do not form a valid range
    """
    source_file = unit.get_file(file_name)
    try:
        file_size = get_file_size(file_name)
    except OSError as e:
        logger.error(f"Cannot stat {file_name}: {e}")
        raise LocationResolutionError("cannot retrieve location") from e

    # top/last location of the file
    top_loc = unit.get_location_for_offset(source_file, 0)
    last_loc = unit.get_location_for_offset(source_file, file_size)
    if top_loc is None or last_loc is None:
        logger.error(f"Cannot resolve offsets 0..{file_size} in {file_name}")
        raise LocationResolutionError("cannot retrieve location")

    source_range = unit.get_range(top_loc, last_loc)
    if source_range.is_null:
        logger.error(f"Null range for {file_name}")
        raise RangeConstructionError("cannot retrieve range")

    logger.debug(f"Resolved range {top_loc} - {last_loc}")
    return source_range
