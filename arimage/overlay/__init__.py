"""Выбор, размещение и подкраска оверлеев для отслеживаемых изображений."""

from arimage.overlay.base import ObjectRenderer, RendererFactory
from arimage.overlay.cv_renderer import CvCanvas, CvObjectRenderer, cv_renderer_factory
from arimage.overlay.dispatcher import DrawCommand, OverlayDispatcher
from arimage.overlay.keys import derive_keys
from arimage.overlay.palette import TintPalette, hex_to_color
from arimage.overlay.registry import AssetBuildOutcome, RendererRegistry, build_registry
from arimage.overlay.scanner import asset_key, has_extension, scan
from arimage.overlay.transform import AnchorTransform

__all__ = [
    "ObjectRenderer",
    "RendererFactory",
    "CvCanvas",
    "CvObjectRenderer",
    "cv_renderer_factory",
    "DrawCommand",
    "OverlayDispatcher",
    "derive_keys",
    "TintPalette",
    "hex_to_color",
    "AssetBuildOutcome",
    "RendererRegistry",
    "build_registry",
    "asset_key",
    "has_extension",
    "scan",
    "AnchorTransform",
]
