from __future__ import annotations
from PIL import Image, UnidentifiedImageError
import io


ALLOWED_MIME = {"image/jpeg", "image/png"}
EXT_FOR_MIME = {"image/jpeg": "jpg", "image/png": "png"}
MIME_FOR_EXT = {ext: mime for mime, ext in EXT_FOR_MIME.items()}

def sniff_mime(data: bytes) -> str | None:
    try:
        with Image.open(io.BytesIO(data)) as img:
            if img.format == "JPEG":
                return "image/jpeg"
            elif img.format == "PNG":
                return "image/png"
            return None
    except (UnidentifiedImageError, OSError):
        return None
    except Image.DecompressionBombError:
        raise ValueError("Invalid image file")

def validate_image(data: bytes) -> str:
    """
    Check that the upload is an intact JPEG or PNG.
    Returns the detected mime type; raises ValueError otherwise.
    """
    if not data:
        raise ValueError("Empty image file")
    mime = sniff_mime(data)
    if mime not in ALLOWED_MIME:
        raise ValueError("Unsupported image type")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()  # basic integrity
    except (UnidentifiedImageError, OSError, SyntaxError, Image.DecompressionBombError):
        raise ValueError("Invalid image file")
    return mime

def ext_for_mime(mime: str) -> str:
    return EXT_FOR_MIME.get(mime, "bin")

def mime_for_key(key: str) -> str:
    ext = key.rsplit(".", 1)[-1].lower() if "." in key else ""
    return MIME_FOR_EXT.get(ext, "application/octet-stream")
