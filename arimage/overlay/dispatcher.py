"""Выбор и отрисовка оверлея для каждого отслеживаемого изображения."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from arimage.config import Config, config as default_config
from arimage.messages import Anchor, TintColor, TrackedImage
from arimage.overlay.base import ObjectRenderer
from arimage.overlay.keys import derive_keys
from arimage.overlay.palette import TintPalette
from arimage.overlay.registry import RendererRegistry
from arimage.overlay.transform import AnchorTransform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawCommand:
    """Одна отрисовка: какой рендерер, где, в каком масштабе и с какой подкраской."""

    renderer: ObjectRenderer
    model_matrix: np.ndarray
    scale_factor: float
    tint: TintColor


class OverlayDispatcher:
    """
    Диспетчер оверлеев.

    Для изображения, чей ключ цвета есть в model_renderers, рисует модель
    и плоскость-описание рядом с ней; иначе рисует рендерер по умолчанию.
    Состояние между вызовами не хранится.
    """

    def __init__(
        self,
        registry: RendererRegistry,
        cfg: Config | None = None,
    ) -> None:
        """
        Инициализация диспетчера.

        Args:
            registry: Построенный реестр рендереров
            cfg: Конфигурация (по умолчанию глобальная)
        """
        cfg = cfg or default_config
        self.registry = registry
        self.palette = TintPalette.from_config(cfg.tint)
        self.transform = AnchorTransform.from_config(cfg.dispatch)
        self.name_suffix = cfg.dispatch.name_suffix
        self.key_delimiter = cfg.dispatch.key_delimiter
        self.model_scale = cfg.dispatch.model_scale
        self.descriptor_scale = cfg.dispatch.descriptor_scale

    def resolve(self, tracked_image: TrackedImage, anchor: Anchor) -> list[DrawCommand]:
        """
        Определить, что и где рисовать для изображения (без отрисовки).

        Args:
            tracked_image: Отслеживаемое изображение
            anchor: Якорь изображения

        Returns:
            Команды отрисовки в порядке выполнения
        """
        tint = self.palette.color_for(tracked_image.index)
        model_matrix = self.transform.model_matrix(anchor.pose)
        complete_key, color_key = derive_keys(
            tracked_image.name, self.name_suffix, self.key_delimiter
        )

        model_renderer = self.registry.model_renderers.get(color_key)
        if model_renderer is None:
            return [DrawCommand(self.registry.fallback_renderer, model_matrix, self.model_scale, tint)]

        commands = [DrawCommand(model_renderer, model_matrix, self.model_scale, tint)]

        descriptor_renderer = self.registry.descriptor_renderers.get(complete_key)
        if descriptor_renderer is None:
            logger.debug(
                "No descriptor for '%s' (model '%s' found), skipping descriptor",
                complete_key,
                color_key,
            )
            return commands

        descriptor_matrix = self.transform.descriptor_matrix(anchor.pose, tracked_image.extent_x)
        commands.append(
            DrawCommand(descriptor_renderer, descriptor_matrix, self.descriptor_scale, tint)
        )
        return commands

    def draw(
        self,
        view_matrix: np.ndarray,
        projection_matrix: np.ndarray,
        tracked_image: TrackedImage,
        anchor: Anchor,
        color_correction: np.ndarray,
    ) -> list[DrawCommand]:
        """
        Отрисовать оверлей для одного изображения.

        Args:
            view_matrix: Матрица вида камеры
            projection_matrix: Матрица проекции камеры
            tracked_image: Отслеживаемое изображение
            anchor: Якорь в центре изображения
            color_correction: Цветокоррекция RGBA текущего кадра

        Returns:
            Выполненные команды отрисовки
        """
        commands = self.resolve(tracked_image, anchor)
        for command in commands:
            command.renderer.draw(
                command.model_matrix,
                command.scale_factor,
                view_matrix,
                projection_matrix,
                color_correction,
                command.tint,
            )
        return commands

    def draw_all(
        self,
        view_matrix: np.ndarray,
        projection_matrix: np.ndarray,
        tracked: Iterable[tuple[TrackedImage, Anchor | None]],
        color_correction: np.ndarray,
    ) -> int:
        """
        Отрисовать оверлеи для всех изображений кадра.

        Изображения без якоря пропускаются.

        Returns:
            Количество выполненных команд отрисовки
        """
        issued = 0
        for tracked_image, anchor in tracked:
            if anchor is None:
                continue
            issued += len(
                self.draw(view_matrix, projection_matrix, tracked_image, anchor, color_correction)
            )
        return issued
