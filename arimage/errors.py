"""Ошибки построения реестра рендереров."""

from pathlib import Path


class OverlayError(Exception):
    """Базовая ошибка подсистемы оверлеев."""


class ScanError(OverlayError, OSError):
    """Каталог ассетов не удалось прочитать."""

    def __init__(self, directory: str | Path, reason: str) -> None:
        self.directory = Path(directory)
        super().__init__(f"Cannot list asset directory '{self.directory}': {reason}")


class AssetBuildError(OverlayError, OSError):
    """Пару модель+текстура не удалось загрузить."""

    def __init__(self, model_path: str | Path, texture_path: str | Path, reason: str) -> None:
        self.model_path = Path(model_path)
        self.texture_path = Path(texture_path)
        super().__init__(
            f"Could not build renderer for '{self.model_path}' + '{self.texture_path}': {reason}"
        )
