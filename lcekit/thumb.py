"""World thumbnails: a wide-character world name header followed by a PNG."""

from __future__ import annotations

import io
from dataclasses import dataclass, field

from PIL import Image

from .binaryio import BinaryIO, ByteOrder

__all__ = ["Thumb"]

DEFAULT_WORLD_NAME = "New World"


@dataclass
class Thumb:
    """A decoded thumbnail: world name, RGBA pixels and PNG text properties."""

    world_name: str = DEFAULT_WORLD_NAME
    image: bytes = b""
    width: int = 0
    height: int = 0
    properties: list[tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        endian: ByteOrder = ByteOrder.LITTLE,
        header_size: int = 0x100,
        use_4byte_wide_char: bool = False,
    ) -> Thumb:
        """Parse a thumbnail.

        With a non-zero *header_size* the data starts with a NUL-terminated
        world name (UTF-16, or UTF-32 when *use_4byte_wide_char*), and the PNG
        starts *header_size* bytes in.
        """
        name = DEFAULT_WORLD_NAME
        image_data = bytes(data)
        if header_size != 0:
            reader = BinaryIO(data)
            if use_4byte_wide_char:
                name = reader.read_wchar4_nt(endian)
            else:
                name = reader.read_wchar2_nt(endian)
            image_data = image_data[header_size:]

        try:
            with Image.open(io.BytesIO(image_data)) as img:
                img.load()
                text = dict(getattr(img, "text", {}))
                rgba = img.convert("RGBA")
        except (OSError, SyntaxError, ValueError) as exc:
            raise ValueError(f"decode error: {exc}") from exc

        return cls(
            world_name=name,
            image=rgba.tobytes(),
            width=rgba.width,
            height=rgba.height,
            properties=list(text.items()),
        )