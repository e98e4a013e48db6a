"""Render tree adapters for RenderTreeLib."""

from .native import NativeRenderAdapter
from .vnode import VNodeAdapter, read_field

__all__ = [
    'NativeRenderAdapter',
    'VNodeAdapter',
    'read_field',
]
