"""Палитра подкраски оверлеев."""

from collections.abc import Sequence

from arimage.config import TintConfig
from arimage.messages import TintColor


def hex_to_color(color_hex: int, intensity: float = 1.0, alpha: float = 1.0) -> TintColor:
    """
    Перевести 0xRRGGBB в RGBA с множителем яркости.

    Args:
        color_hex: Цвет в формате 0xRRGGBB
        intensity: Множитель для каналов RGB
        alpha: Значение альфа-канала

    Returns:
        Цвет подкраски
    """
    red = ((color_hex & 0xFF0000) >> 16) / 255.0 * intensity
    green = ((color_hex & 0x00FF00) >> 8) / 255.0 * intensity
    blue = (color_hex & 0x0000FF) / 255.0 * intensity
    return TintColor(red, green, blue, alpha)


class TintPalette:
    """
    Детерминированная подкраска по индексу изображения.

    Индекс берётся по модулю размера палитры, поэтому изображения
    с индексами i и i + N получают одинаковый цвет.
    """

    def __init__(self, palette: Sequence[int], intensity: float = 0.1, alpha: float = 1.0) -> None:
        if not palette:
            raise ValueError("Tint palette must contain at least one color")
        self._colors = tuple(hex_to_color(color, intensity, alpha) for color in palette)
        self.intensity = intensity

    @classmethod
    def from_config(cls, tint_config: TintConfig) -> "TintPalette":
        return cls(tint_config.palette, tint_config.intensity, tint_config.alpha)

    def __len__(self) -> int:
        return len(self._colors)

    def color_for(self, index: int) -> TintColor:
        return self._colors[index % len(self._colors)]
