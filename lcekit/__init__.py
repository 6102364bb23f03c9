"""Readers and writers for Minecraft Legacy Console Edition file formats."""

__version__ = "1.1.3"

__all__ = [
    "archive",
    "binaryio",
    "block",
    "chunk",
    "color",
    "compression",
    "filesystem",
    "info",
    "localization",
    "region",
    "save",
    "soundbank",
    "thumb",
]