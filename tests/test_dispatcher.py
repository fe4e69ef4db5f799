"""Тесты для диспетчера оверлеев."""

from types import MappingProxyType

import numpy as np
import pytest

from arimage.config import Config, DispatchConfig
from arimage.messages import Anchor, Pose, TintColor, TrackedImage
from arimage.overlay.base import ObjectRenderer
from arimage.overlay.dispatcher import OverlayDispatcher
from arimage.overlay.registry import RendererRegistry
from arimage.overlay.transform import AnchorTransform

VIEW = np.eye(4)
PROJECTION = np.eye(4)
COLOR_CORRECTION = np.ones(4, dtype=np.float32)


class _RecordingRenderer(ObjectRenderer):
    """Рендерер, который записывает вызовы draw."""

    def __init__(self, name: str, calls: list[tuple]) -> None:
        super().__init__()
        self.name = name
        self.calls = calls

    def draw(
        self,
        model_matrix: np.ndarray,
        scale_factor: float,
        view_matrix: np.ndarray,
        projection_matrix: np.ndarray,
        color_correction: np.ndarray,
        tint: TintColor,
    ) -> None:
        self.calls.append((self.name, model_matrix.copy(), scale_factor, tint))


@pytest.fixture
def calls() -> list[tuple]:
    return []


@pytest.fixture
def registry(calls: list[tuple]) -> RendererRegistry:
    return RendererRegistry(
        model_renderers=MappingProxyType(
            {
                "red": _RecordingRenderer("model:red", calls),
                "blue": _RecordingRenderer("model:blue", calls),
            }
        ),
        descriptor_renderers=MappingProxyType(
            {
                "group1-red": _RecordingRenderer("descriptor:group1-red", calls),
                "red": _RecordingRenderer("descriptor:red", calls),
            }
        ),
        fallback_renderer=_RecordingRenderer("fallback", calls),
    )


@pytest.fixture
def anchor() -> Anchor:
    return Anchor(pose=Pose(translation=(0.1, 0.0, -0.5), rotation=(0.0, 0.3826834, 0.0, 0.9238795)))


def test_matching_image_draws_model_and_descriptor(
    registry: RendererRegistry, anchor: Anchor, calls: list[tuple]
) -> None:
    """Имя group1-red.png рисует модель red и описание group1-red."""
    dispatcher = OverlayDispatcher(registry)
    image = TrackedImage(name="group1-red.png", index=3, extent_x=0.2, extent_y=0.1)

    dispatcher.draw(VIEW, PROJECTION, image, anchor, COLOR_CORRECTION)

    assert [call[0] for call in calls] == ["model:red", "descriptor:group1-red"]


def test_matching_image_uses_scales_and_matrices(
    registry: RendererRegistry, anchor: Anchor, calls: list[tuple]
) -> None:
    """Модель: матрица позы и масштаб 0.4; описание: смещённая матрица и 0.2."""
    dispatcher = OverlayDispatcher(registry)
    image = TrackedImage(name="group1-red.png", index=3, extent_x=0.2, extent_y=0.1)
    transform = AnchorTransform()

    dispatcher.draw(VIEW, PROJECTION, image, anchor, COLOR_CORRECTION)

    (_, model_matrix, model_scale, _), (_, descriptor_matrix, descriptor_scale, _) = calls
    np.testing.assert_array_equal(model_matrix, anchor.pose.to_matrix())
    np.testing.assert_array_equal(descriptor_matrix, transform.descriptor_matrix(anchor.pose, 0.2))
    assert model_scale == pytest.approx(0.4)
    assert descriptor_scale == pytest.approx(0.2)


def test_both_draws_share_tint_from_index(
    registry: RendererRegistry, anchor: Anchor, calls: list[tuple]
) -> None:
    """Подкраска выбирается по индексу и одинакова для модели и описания."""
    dispatcher = OverlayDispatcher(registry)
    image = TrackedImage(name="group1-red.png", index=17, extent_x=0.2, extent_y=0.1)

    dispatcher.draw(VIEW, PROJECTION, image, anchor, COLOR_CORRECTION)

    expected = dispatcher.palette.color_for(1)
    assert [call[3] for call in calls] == [expected, expected]


def test_unknown_color_draws_fallback_only(
    registry: RendererRegistry, anchor: Anchor, calls: list[tuple]
) -> None:
    """Нет модели для ключа цвета - ровно одна отрисовка рендерером по умолчанию."""
    dispatcher = OverlayDispatcher(registry)
    image = TrackedImage(name="group1-purple.png", index=0, extent_x=0.2, extent_y=0.1)

    commands = dispatcher.draw(VIEW, PROJECTION, image, anchor, COLOR_CORRECTION)

    assert len(commands) == 1
    assert [call[0] for call in calls] == ["fallback"]
    np.testing.assert_array_equal(calls[0][1], anchor.pose.to_matrix())
    assert calls[0][2] == pytest.approx(0.4)


def test_missing_descriptor_still_draws_model(
    registry: RendererRegistry, anchor: Anchor, calls: list[tuple]
) -> None:
    """Модель есть, описания для полного ключа нет - рисуется только модель."""
    dispatcher = OverlayDispatcher(registry)
    image = TrackedImage(name="group2-blue.png", index=1, extent_x=0.2, extent_y=0.1)

    dispatcher.draw(VIEW, PROJECTION, image, anchor, COLOR_CORRECTION)

    assert [call[0] for call in calls] == ["model:blue"]


def test_descriptor_lookup_uses_complete_key(
    registry: RendererRegistry, anchor: Anchor, calls: list[tuple]
) -> None:
    """Описание ищется по полному ключу, а не по ключу цвета."""
    dispatcher = OverlayDispatcher(registry)
    image = TrackedImage(name="group9-red.png", index=1, extent_x=0.2, extent_y=0.1)

    dispatcher.draw(VIEW, PROJECTION, image, anchor, COLOR_CORRECTION)

    # descriptor_renderers["red"] существует, но не используется
    assert [call[0] for call in calls] == ["model:red"]


def test_name_without_delimiter_uses_whole_key(
    registry: RendererRegistry, anchor: Anchor, calls: list[tuple]
) -> None:
    """Имя red.png без разделителя: оба ключа равны red."""
    dispatcher = OverlayDispatcher(registry)
    image = TrackedImage(name="red.png", index=1, extent_x=0.2, extent_y=0.1)

    dispatcher.draw(VIEW, PROJECTION, image, anchor, COLOR_CORRECTION)

    assert [call[0] for call in calls] == ["model:red", "descriptor:red"]


def test_dispatch_is_idempotent(
    registry: RendererRegistry, anchor: Anchor, calls: list[tuple]
) -> None:
    """Одинаковые входы дают побитово одинаковые матрицы и подкраску."""
    dispatcher = OverlayDispatcher(registry)
    image = TrackedImage(name="group1-red.png", index=5, extent_x=0.2, extent_y=0.1)

    dispatcher.draw(VIEW, PROJECTION, image, anchor, COLOR_CORRECTION)
    first = list(calls)
    calls.clear()
    dispatcher.draw(VIEW, PROJECTION, image, anchor, COLOR_CORRECTION)

    assert len(first) == len(calls) == 2
    for (name_a, matrix_a, scale_a, tint_a), (name_b, matrix_b, scale_b, tint_b) in zip(first, calls):
        assert name_a == name_b
        assert np.array_equal(matrix_a, matrix_b)
        assert scale_a == scale_b
        assert tint_a == tint_b


def test_resolve_does_not_draw(
    registry: RendererRegistry, anchor: Anchor, calls: list[tuple]
) -> None:
    """resolve() только планирует отрисовку."""
    dispatcher = OverlayDispatcher(registry)
    image = TrackedImage(name="group1-red.png", index=0, extent_x=0.2, extent_y=0.1)

    commands = dispatcher.resolve(image, anchor)

    assert len(commands) == 2
    assert calls == []


def test_draw_all_skips_images_without_anchor(
    registry: RendererRegistry, anchor: Anchor, calls: list[tuple]
) -> None:
    """Изображения без якоря пропускаются."""
    dispatcher = OverlayDispatcher(registry)
    tracked = [
        (TrackedImage(name="group1-red.png", index=0, extent_x=0.2, extent_y=0.1), anchor),
        (TrackedImage(name="group1-blue.png", index=1, extent_x=0.2, extent_y=0.1), None),
        (TrackedImage(name="unknown.png", index=2, extent_x=0.2, extent_y=0.1), anchor),
    ]

    issued = dispatcher.draw_all(VIEW, PROJECTION, tracked, COLOR_CORRECTION)

    assert issued == 3
    assert [call[0] for call in calls] == ["model:red", "descriptor:group1-red", "fallback"]


def test_scales_configurable(
    registry: RendererRegistry, anchor: Anchor, calls: list[tuple]
) -> None:
    """Масштабы берутся из конфига."""
    cfg = Config(dispatch=DispatchConfig(model_scale=1.0, descriptor_scale=0.5))
    dispatcher = OverlayDispatcher(registry, cfg)
    image = TrackedImage(name="group1-red.png", index=0, extent_x=0.2, extent_y=0.1)

    dispatcher.draw(VIEW, PROJECTION, image, anchor, COLOR_CORRECTION)

    assert [call[2] for call in calls] == [1.0, 0.5]
