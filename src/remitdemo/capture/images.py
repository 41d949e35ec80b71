"""Data URL helpers for captured images."""

import base64
import re
from typing import Optional

DATA_URL_PREFIX = re.compile(r"^data:image/(png|jpeg|jpg|webp);base64,")


def strip_data_url(data_url: Optional[str]) -> Optional[str]:
    """Return the raw base64 payload of an image data URL."""
    if not data_url:
        return None
    return DATA_URL_PREFIX.sub("", data_url)


def to_data_url(payload: str, mime: str = "image/png") -> str:
    """Wrap a base64 payload into a data URL."""
    return f"data:{mime};base64,{payload}"


def encode_image(content: bytes, mime: str = "image/jpeg") -> str:
    """Encode uploaded file bytes as a data URL."""
    return to_data_url(base64.b64encode(content).decode("ascii"), mime)
