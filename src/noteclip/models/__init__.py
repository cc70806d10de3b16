"""Noteclip block and configuration models."""

from .blocks import (
    Annotations,
    Block,
    BlockType,
    RichTextSpan,
    append_children_request,
    blocks_to_request,
)
from .config import ConversionConfig, InlineMode

__all__ = [
    # Blocks
    "Annotations",
    "Block",
    "BlockType",
    "RichTextSpan",
    "append_children_request",
    "blocks_to_request",
    # Config
    "ConversionConfig",
    "InlineMode",
]
