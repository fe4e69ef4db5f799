"""OpenCV рендерер объектов: каркасная проекция модели на кадр."""

import logging
from pathlib import Path

import cv2
import numpy as np

from arimage.errors import AssetBuildError
from arimage.messages import TintColor
from arimage.overlay.base import ObjectRenderer, RendererFactory
from arimage.overlay.transform import scale_matrix

logger = logging.getLogger(__name__)

# Вершины дальше этой границы NDC (несколько размеров кадра) не рисуются
MAX_NDC = 8.0


def load_obj(path: Path) -> tuple[np.ndarray, list[list[int]]]:
    """
    Прочитать вершины и грани из OBJ-файла.

    Поддерживаются строки `v x y z` и `f i[/t[/n]] ...` (индексы с 1,
    отрицательные считаются от конца).

    Returns:
        (вершины Nx3, грани как списки индексов с 0)

    Raises:
        OSError: Если файл не читается
        ValueError: Если в файле нет вершин, есть пустые грани или индексы неверны
    """
    vertices: list[tuple[float, float, float]] = []
    faces: list[list[int]] = []

    with open(path, encoding="utf-8") as f:
        for line in f:
            parts = line.split()
            if not parts:
                continue
            if parts[0] == "v":
                x, y, z = (float(value) for value in parts[1:4])
                vertices.append((x, y, z))
            elif parts[0] == "f":
                face = []
                for token in parts[1:]:
                    index = int(token.split("/")[0])
                    face.append(index - 1 if index > 0 else len(vertices) + index)
                if not face:
                    raise ValueError(f"Empty face in {path}")
                faces.append(face)

    if not vertices:
        raise ValueError(f"No vertices in {path}")
    for face in faces:
        if any(i < 0 or i >= len(vertices) for i in face):
            raise ValueError(f"Face index out of range in {path}")
    return np.array(vertices, dtype=np.float64), faces


class CvCanvas:
    """Текущий кадр, на который рисуют все рендереры одного бэкенда."""

    def __init__(self) -> None:
        self.frame: np.ndarray | None = None

    def bind(self, frame: np.ndarray) -> None:
        """
        Привязать кадр для следующих отрисовок.

        Args:
            frame: Кадр в формате RGB (numpy array), модифицируется на месте
        """
        self.frame = frame


class CvObjectRenderer(ObjectRenderer):
    """
    Рендерер объекта на основе OpenCV.

    Проецирует рёбра граней модели на кадр холста. Цвет линий: средний
    цвет текстуры с цветокоррекцией плюс подкраска.
    """

    def __init__(self, canvas: CvCanvas, model_path: Path, texture_path: Path, thickness: int = 1) -> None:
        super().__init__()
        self.canvas = canvas
        self.thickness = thickness
        self.vertices, self.faces = load_obj(model_path)

        texture = cv2.imread(str(texture_path), cv2.IMREAD_COLOR)
        if texture is None:
            raise AssetBuildError(model_path, texture_path, "texture could not be decoded")
        # OpenCV читает BGR, кадры у нас RGB
        self.base_color = texture.reshape(-1, 3).mean(axis=0)[::-1] / 255.0

    def _color(self, color_correction: np.ndarray, tint: TintColor) -> tuple[int, int, int]:
        rgb = self.base_color * np.asarray(color_correction, dtype=np.float64)[:3]
        rgb = np.clip(rgb + tint.as_array()[:3], 0.0, 1.0)
        red, green, blue = (int(round(channel * 255)) for channel in rgb)
        return red, green, blue

    def project(
        self,
        model_matrix: np.ndarray,
        scale_factor: float,
        view_matrix: np.ndarray,
        projection_matrix: np.ndarray,
    ) -> tuple[np.ndarray, np.ndarray]:
        """
        Спроецировать вершины модели в пиксели кадра.

        Returns:
            (пиксели Nx2, маска вершин перед камерой и в пределах MAX_NDC)
        """
        frame = self.canvas.frame
        if frame is None:
            raise RuntimeError("No frame bound to canvas")
        height, width = frame.shape[:2]

        mvp = projection_matrix @ view_matrix @ model_matrix @ scale_matrix(scale_factor)
        homogeneous = np.hstack([self.vertices, np.ones((len(self.vertices), 1))])
        clip = homogeneous @ mvp.T

        in_front = clip[:, 3] > 1e-9
        w = np.where(in_front, clip[:, 3], 1.0)
        ndc = clip[:, :2] / w[:, None]
        visible = in_front & np.all(np.isfinite(ndc) & (np.abs(ndc) <= MAX_NDC), axis=1)

        pixels = np.empty((len(self.vertices), 2), dtype=np.float64)
        pixels[:, 0] = (ndc[:, 0] + 1.0) * 0.5 * width
        pixels[:, 1] = (1.0 - ndc[:, 1]) * 0.5 * height
        return pixels, visible

    def draw(
        self,
        model_matrix: np.ndarray,
        scale_factor: float,
        view_matrix: np.ndarray,
        projection_matrix: np.ndarray,
        color_correction: np.ndarray,
        tint: TintColor,
    ) -> None:
        pixels, visible = self.project(model_matrix, scale_factor, view_matrix, projection_matrix)
        color = self._color(color_correction, tint)
        frame = self.canvas.frame

        # Без граней рисуем только точки
        if not self.faces:
            for (x, y), seen in zip(pixels, visible):
                if seen:
                    cv2.circle(frame, (int(x), int(y)), 1, color, -1, cv2.LINE_AA)
            return

        for face in self.faces:
            if not all(visible[i] for i in face):
                continue
            points = np.round(pixels[face]).astype(np.int32).reshape(-1, 1, 2)
            cv2.polylines(frame, [points], True, color, self.thickness, cv2.LINE_AA)


def cv_renderer_factory(canvas: CvCanvas, thickness: int = 1) -> RendererFactory:
    """
    Фабрика OpenCV-рендереров, рисующих на общем холсте.

    Args:
        canvas: Холст с текущим кадром
        thickness: Толщина линий

    Returns:
        Фабрика для build_registry()
    """

    def factory(model_path: Path, texture_path: Path) -> ObjectRenderer:
        logger.debug("Creating OpenCV renderer for %s", model_path.name)
        return CvObjectRenderer(canvas, model_path, texture_path, thickness)

    return factory
