"""Testing utilities for RenderTreeLib."""

from .fixtures import component, h, fragment, slot, Renderer, simple_mount

__all__ = ['component', 'h', 'fragment', 'slot', 'Renderer', 'simple_mount']
