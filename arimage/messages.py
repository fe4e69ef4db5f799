from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True)
class Pose:
    translation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)  # qx, qy, qz, qw

    @classmethod
    def identity(cls) -> "Pose":
        return cls()

    def to_matrix(self) -> np.ndarray:
        """Матрица 4x4 (поворот + перенос, без масштаба)."""
        x, y, z, w = self.rotation
        norm = np.sqrt(x * x + y * y + z * z + w * w)
        if norm == 0.0:
            raise ValueError("Pose rotation quaternion must be non-zero")
        x, y, z, w = x / norm, y / norm, z / norm, w / norm

        matrix = np.eye(4, dtype=np.float64)
        matrix[:3, :3] = [
            [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
            [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
            [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
        ]
        matrix[:3, 3] = self.translation
        return matrix


@dataclass
class Anchor:
    pose: Pose = field(default_factory=Pose.identity)


@dataclass
class TrackedImage:
    name: str  # e.g. "group1-red.png"
    index: int  # stable per detected image, >= 0
    extent_x: float  # meters
    extent_y: float  # meters


@dataclass(frozen=True)
class TintColor:
    r: float
    g: float
    b: float
    a: float = 1.0

    def as_array(self) -> np.ndarray:
        return np.array([self.r, self.g, self.b, self.a], dtype=np.float32)
