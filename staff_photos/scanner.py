"""Staff scanner module - lists a photo folder and turns each image file into a StaffMember."""

import os
from typing import List
import logging

from staff_photos.exceptions import NotFound, PermissionRegistrationFailed
from staff_photos.models import StaffMember
from staff_photos.namer import parse_filename
from staff_photos.scope import AccessScope

logger = logging.getLogger(__name__)

# Supported image extensions (compared case-sensitively, without the dot)
SUPPORTED_EXTENSIONS = {'jpg', 'jpeg', 'png'}


def is_supported_image(filename: str, case_insensitive: bool = False) -> bool:
    """
    Check a filename against SUPPORTED_EXTENSIONS.

    Files without an extension never match. Uppercase extensions such as
    ".JPG" only match when case_insensitive is set.
    """
    ext = os.path.splitext(filename)[1][1:]
    if not ext:
        return False
    if case_insensitive:
        ext = ext.lower()
    return ext in SUPPORTED_EXTENSIONS


def _grant(grant, *args) -> None:
    """Call a scope grant, wrapping any failure in PermissionRegistrationFailed."""
    try:
        grant(*args)
    except Exception as e:
        logger.error(f"Access grant failed for {args[0]}: {e}")
        raise PermissionRegistrationFailed(f"Could not register access ({e})", args[0]) from e


def scan_folder(directory: str, scope: AccessScope, case_insensitive: bool = False) -> List[StaffMember]:
    """
    Scan one folder (non-recursively) for staff photos.

    The directory and every matched file are registered with the access
    scope so later reads of those paths are authorized. Any error aborts
    the whole scan; no partial results are returned.

    Args:
        directory: Folder containing the photos
        scope: Access scope receiving the directory and file grants
        case_insensitive: Also accept uppercase extensions such as ".JPG"

    Returns:
        List of StaffMember objects in directory enumeration order

    Raises:
        NotFound: If directory doesn't exist
        PermissionRegistrationFailed: If the scope rejects a grant
        PermissionError: If the directory cannot be read
        OSError: For any other read failure, including a non-directory path
    """
    directory = os.fspath(directory)
    if not os.path.exists(directory):
        raise NotFound("Directory does not exist", directory)

    _grant(scope.allow_directory, directory, True)

    staff_members = []

    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                if not entry.is_file():
                    continue
                if not is_supported_image(entry.name, case_insensitive):
                    continue

                stem = os.path.splitext(entry.name)[0]
                name, job_title = parse_filename(stem)
                image_path = os.path.join(directory, entry.name)

                _grant(scope.allow_file, image_path)

                staff_members.append(StaffMember(
                    name=name,
                    job_title=job_title,
                    image_path=image_path,
                ))
                logger.debug(f"Found staff photo: {image_path}")

    except PermissionError as e:
        logger.error(f"Permission denied while scanning {directory}: {e}")
        raise
    except OSError as e:
        logger.error(f"Error reading {directory}: {e}")
        raise

    logger.info(f"Scanned {directory}: found {len(staff_members)} staff photos")
    return staff_members
