# moodboard/infrastructure/image/sniff.py
from typing import Optional
from PIL import GifImagePlugin, JpegImagePlugin, PngImagePlugin

# Leading bytes are enough to tell the formats apart.
SNIFF_LENGTH = 512

# MIME type -> Pillow's signature check for that format
ALLOWED_FORMATS = {
    "image/gif": GifImagePlugin._accept,
    "image/jpeg": JpegImagePlugin._accept,
    "image/png": PngImagePlugin._accept,
}

FALLBACK_CONTENT_TYPE = "application/octet-stream"

def detect_content_type(data: bytes) -> Optional[str]:
    """Return the MIME type of ``data`` if it starts with a GIF, JPEG or PNG signature.

    Only the signature is checked; the image itself is never parsed.
    """
    prefix = bytes(data[:SNIFF_LENGTH])
    for mime, accept in ALLOWED_FORMATS.items():
        if accept(prefix):
            return mime
    return None

def content_type_or_default(data: bytes) -> str:
    return detect_content_type(data) or FALLBACK_CONTENT_TYPE
