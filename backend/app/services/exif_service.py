"""
Capture metadata extraction from uploaded image bytes.
"""
from PIL import ExifTags, Image, UnidentifiedImageError
from typing import Any, Dict, Optional
import io
import logging

logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    value = str(value).replace("\x00", "").strip()
    return value or None


def _number(value: Any) -> Optional[float]:
    if isinstance(value, (tuple, list)):
        value = value[0] if value else None
    try:
        number = float(value)
    except (TypeError, ValueError, ZeroDivisionError):
        return None
    return number if number > 0 else None


def format_shutter_speed(seconds: float) -> str:
    if seconds >= 1:
        return f"{seconds:.1f}s"
    return f"1/{round(1 / seconds)}"


def extract_exif(content: bytes) -> Dict[str, Any]:
    """
    Read camera, lens, exposure and capture date from an image.

    Only fields present in the file are returned, keyed like the Photo
    columns. Files Pillow cannot parse yield an empty dict.
    """
    try:
        with Image.open(io.BytesIO(content)) as image:
            width, height = image.size
            exif = image.getexif()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.warning(f"Could not read image metadata: {e}")
        return {}

    base = ExifTags.Base
    details = exif.get_ifd(ExifTags.IFD.Exif)
    metadata: Dict[str, Any] = {"width": width, "height": height}

    metadata["camera_make"] = _text(exif.get(base.Make))
    metadata["camera_model"] = _text(exif.get(base.Model))
    metadata["lens"] = _text(details.get(base.LensModel))
    metadata["date_taken"] = _text(details.get(base.DateTimeOriginal)) or _text(exif.get(base.DateTime))

    iso = _number(details.get(base.ISOSpeedRatings))
    if iso:
        metadata["iso"] = int(iso)

    f_number = _number(details.get(base.FNumber))
    if f_number:
        metadata["aperture"] = f"f/{f_number:.1f}"

    exposure = _number(details.get(base.ExposureTime))
    if exposure:
        metadata["shutter_speed"] = format_shutter_speed(exposure)

    focal_length = _number(details.get(base.FocalLength))
    if focal_length:
        metadata["focal_length"] = f"{focal_length:.1f}mm"

    return {key: value for key, value in metadata.items() if value is not None}
