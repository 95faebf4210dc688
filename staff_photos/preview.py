"""Preview renderer module - decodes a staff photo, downsizes it and returns it as a JPEG data URI."""

import base64
import io
import os
from typing import Tuple
import logging

from PIL import Image, UnidentifiedImageError
import pillow_heif

from staff_photos.exceptions import DecodeError, EncodeError, NotFound

# Register HEIF opener with Pillow
pillow_heif.register_heif_opener()

logger = logging.getLogger(__name__)

# Longest side of a preview, in pixels
MAX_DIMENSION = 400
# JPEG quality for previews (face thumbnails, favours small payloads)
JPEG_QUALITY = 85
DATA_URI_PREFIX = 'data:image/jpeg;base64,'

# Modes the JPEG encoder accepts as-is
JPEG_MODES = {'RGB', 'L'}


def compute_preview_size(width: int, height: int, max_dimension: int = MAX_DIMENSION) -> Tuple[int, int]:
    """
    Fit (width, height) inside a max_dimension square, keeping the aspect ratio.

    Images already within the box keep their size. Otherwise the longer side
    becomes max_dimension and the shorter side is scaled with floor division.
    Square images take the height branch.

    Args:
        width: Native width in pixels
        height: Native height in pixels
        max_dimension: Bounding box side

    Returns:
        Tuple of (width, height) for the preview
    """
    if width <= max_dimension and height <= max_dimension:
        return width, height

    if width > height:
        return max_dimension, (max_dimension * height) // width
    return (max_dimension * width) // height, max_dimension


def load_image(path: str) -> Image.Image:
    """
    Decode an image file fully into memory.

    Raises:
        NotFound: If the file doesn't exist
        PermissionError: If the file cannot be opened for reading
        DecodeError: If the bytes are not a supported or valid image
    """
    try:
        with Image.open(path) as image:
            image.load()
            return image.copy() if image.mode in JPEG_MODES else image.convert('RGB')
    except FileNotFoundError as e:
        raise NotFound("Image file does not exist", path) from e
    except PermissionError:
        logger.error(f"Permission denied reading {path}")
        raise
    except UnidentifiedImageError as e:
        raise DecodeError("Unsupported image format", path) from e
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Could not decode image ({e})", path) from e


def encode_jpeg(image: Image.Image, quality: int = JPEG_QUALITY) -> bytes:
    """
    Encode an image as JPEG bytes.

    Raises:
        EncodeError: If the encoder rejects the image
    """
    buffer = io.BytesIO()
    try:
        image.save(buffer, 'JPEG', quality=quality)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Could not encode preview ({e})") from e
    return buffer.getvalue()


def render_preview(path: str) -> str:
    """
    Render a staff photo as a resized JPEG data URI.

    Every call decodes, resizes and encodes again; nothing is cached. Output
    is deterministic for an unchanged file.

    Args:
        path: Path to the image file

    Returns:
        String of the form "data:image/jpeg;base64,<payload>"

    Raises:
        NotFound: If path doesn't exist
        DecodeError: For corrupted or unsupported image files
        EncodeError: If the preview cannot be encoded
    """
    path = os.fspath(path)
    if not os.path.exists(path):
        raise NotFound("Image file does not exist", path)

    image = load_image(path)

    width, height = image.size
    new_size = compute_preview_size(width, height)
    if new_size != (width, height):
        image = image.resize(new_size, Image.LANCZOS)
        logger.debug(f"Resized {path} from {width}x{height} to {new_size[0]}x{new_size[1]}")

    try:
        data = encode_jpeg(image)
    except EncodeError as e:
        logger.error(f"Failed to encode preview for {path}: {e}")
        raise EncodeError(e.message, path) from e

    return DATA_URI_PREFIX + base64.b64encode(data).decode('ascii')
