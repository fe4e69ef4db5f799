"""Базовые интерфейсы для отрисовки оверлеев."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Protocol

import numpy as np

from arimage.messages import TintColor


class ObjectRenderer(ABC):
    """
    Отрисовываемый 3D-объект (модель + текстура).

    Конкретный бэкенд (GPU, OpenCV и т.д.) загружает ресурсы при создании
    и рисует объект по матрице модели, масштабу и подкраске.
    Экземпляр принадлежит ровно одной записи реестра и не разделяется.
    """

    def __init__(self) -> None:
        self.ambient = 0.3
        self.diffuse = 1.0
        self.specular = 1.0
        self.specular_power = 6.0

    def set_material_properties(
        self, ambient: float, diffuse: float, specular: float, specular_power: float
    ) -> None:
        """
        Задать свойства материала (вызывается один раз после создания).

        Args:
            ambient: Фоновое освещение
            diffuse: Диффузное отражение
            specular: Зеркальное отражение
            specular_power: Степень блика
        """
        self.ambient = ambient
        self.diffuse = diffuse
        self.specular = specular
        self.specular_power = specular_power

    @abstractmethod
    def draw(
        self,
        model_matrix: np.ndarray,
        scale_factor: float,
        view_matrix: np.ndarray,
        projection_matrix: np.ndarray,
        color_correction: np.ndarray,
        tint: TintColor,
    ) -> None:
        """
        Отрисовать объект.

        Args:
            model_matrix: Матрица модели 4x4 (без масштаба)
            scale_factor: Равномерный масштаб, применяемый рендерером
            view_matrix: Матрица вида 4x4
            projection_matrix: Матрица проекции 4x4
            color_correction: Цветокоррекция RGBA от трекинга
            tint: Подкраска отслеживаемого изображения
        """
        ...


class RendererFactory(Protocol):
    """
    Фабрика рендереров.

    Создаёт рендерер из пары файлов. При ошибке загрузки бросает
    OSError (или AssetBuildError) либо ValueError.
    """

    def __call__(self, model_path: Path, texture_path: Path) -> ObjectRenderer:
        ...
