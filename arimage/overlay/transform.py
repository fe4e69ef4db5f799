"""Матрицы модели для оверлея и плоскости-описания."""

import math

import numpy as np

from arimage.config import DispatchConfig
from arimage.messages import Pose


def translation_matrix(x: float, y: float, z: float) -> np.ndarray:
    matrix = np.eye(4, dtype=np.float64)
    matrix[:3, 3] = (x, y, z)
    return matrix


def rotation_matrix(axis: tuple[float, float, float], angle: float) -> np.ndarray:
    """
    Поворот на угол вокруг оси (формула Родрига).

    Args:
        axis: Ось поворота (нормализуется)
        angle: Угол в радианах

    Returns:
        Матрица 4x4
    """
    ax = np.asarray(axis, dtype=np.float64)
    norm = np.linalg.norm(ax)
    if norm == 0.0:
        raise ValueError("Rotation axis must be non-zero")
    x, y, z = ax / norm
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c

    matrix = np.eye(4, dtype=np.float64)
    matrix[:3, :3] = [
        [t * x * x + c, t * x * y - s * z, t * x * z + s * y],
        [t * x * y + s * z, t * y * y + c, t * y * z - s * x],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
    ]
    return matrix


def scale_matrix(factor: float) -> np.ndarray:
    matrix = np.eye(4, dtype=np.float64)
    matrix[0, 0] = matrix[1, 1] = matrix[2, 2] = factor
    return matrix


class AnchorTransform:
    """
    Матрицы модели, вычисляемые из позы якоря.

    Описание сдвигается вдоль локальной оси X изображения и поворачивается
    вокруг локальной оси Z. Оба преобразования задаются в системе якоря:
    M = pose @ T(offset * extent_x, 0, 0) @ Rz(angle).
    """

    def __init__(self, offset_factor: float = -0.5, rotation_deg: float = 45.0) -> None:
        self.offset_factor = offset_factor
        self.rotation = math.radians(rotation_deg)

    @classmethod
    def from_config(cls, dispatch_config: DispatchConfig) -> "AnchorTransform":
        return cls(dispatch_config.descriptor_offset_factor, dispatch_config.descriptor_rotation_deg)

    def model_matrix(self, pose: Pose) -> np.ndarray:
        return pose.to_matrix()

    def descriptor_matrix(self, pose: Pose, extent_x: float) -> np.ndarray:
        offset = translation_matrix(self.offset_factor * extent_x, 0.0, 0.0)
        spin = rotation_matrix((0.0, 0.0, 1.0), self.rotation)
        return pose.to_matrix() @ offset @ spin
