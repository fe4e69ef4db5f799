"""Реестр рендереров, построенный по содержимому каталога ассетов."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from arimage.config import Config, config as default_config
from arimage.errors import AssetBuildError, ScanError
from arimage.overlay.base import ObjectRenderer, RendererFactory
from arimage.overlay.scanner import asset_key, has_extension, scan

logger = logging.getLogger(__name__)


@dataclass
class AssetBuildOutcome:
    """Результат построения одного рендерера: либо рендерер, либо ошибка."""

    key: str
    model_path: Path
    texture_path: Path
    renderer: ObjectRenderer | None = None
    error: AssetBuildError | None = None

    @property
    def ok(self) -> bool:
        return self.renderer is not None


@dataclass(frozen=True)
class RendererRegistry:
    """
    Реестр рендереров.

    Заполняется один раз в build_registry() и дальше только читается.
    """

    model_renderers: Mapping[str, ObjectRenderer]
    descriptor_renderers: Mapping[str, ObjectRenderer]
    fallback_renderer: ObjectRenderer
    failures: tuple[AssetBuildOutcome, ...] = field(default=())


def create_renderer(
    factory: RendererFactory,
    model_path: Path,
    texture_path: Path,
    cfg: Config | None = None,
) -> ObjectRenderer:
    """
    Создать рендерер и применить свойства материала.

    Raises:
        AssetBuildError: Если фабрика не смогла загрузить модель или текстуру
    """
    cfg = cfg or default_config
    try:
        renderer = factory(model_path, texture_path)
    except AssetBuildError:
        raise
    except (OSError, ValueError) as e:
        raise AssetBuildError(model_path, texture_path, str(e)) from e

    material = cfg.material
    renderer.set_material_properties(
        material.ambient, material.diffuse, material.specular, material.specular_power
    )
    logger.debug("Loaded renderer %s + %s", model_path.name, texture_path.name)
    return renderer


def _build_outcome(
    factory: RendererFactory, key: str, model_path: Path, texture_path: Path, cfg: Config
) -> AssetBuildOutcome:
    outcome = AssetBuildOutcome(key=key, model_path=model_path, texture_path=texture_path)
    try:
        outcome.renderer = create_renderer(factory, model_path, texture_path, cfg)
    except AssetBuildError as e:
        outcome.error = e
    return outcome


def _scan_models(directory: Path, factory: RendererFactory, cfg: Config) -> list[AssetBuildOutcome]:
    assets = cfg.assets
    default_texture = directory / (assets.default_texture or assets.fallback_texture)

    outcomes = []
    for model_path in scan(directory, has_extension(assets.model_extension)):
        key = asset_key(model_path, assets.model_extension)
        texture_path = model_path.with_name(key + assets.texture_extension)
        if not texture_path.is_file():
            logger.debug("No texture for model %s, using %s", model_path.name, default_texture.name)
            texture_path = default_texture
        outcomes.append(_build_outcome(factory, key, model_path, texture_path, cfg))
    return outcomes


def _scan_descriptors(directory: Path, factory: RendererFactory, cfg: Config) -> list[AssetBuildOutcome]:
    assets = cfg.assets
    plane_path = directory / assets.plane_model

    outcomes = []
    for texture_path in scan(directory, has_extension(assets.descriptor_extension)):
        key = asset_key(texture_path, assets.descriptor_extension)
        outcomes.append(_build_outcome(factory, key, plane_path, texture_path, cfg))
    return outcomes


def _collect(
    category: str, outcomes: list[AssetBuildOutcome], target: dict[str, ObjectRenderer]
) -> list[AssetBuildOutcome]:
    failures = []
    for outcome in outcomes:
        if outcome.renderer is None:
            logger.error("Could not render %s %s: %s", category, outcome.key, outcome.error)
            failures.append(outcome)
            continue
        if outcome.key in target:
            logger.warning("Duplicate %s key '%s', replacing previous renderer", category, outcome.key)
        target[outcome.key] = outcome.renderer
    return failures


def build_registry(
    directory: str | Path,
    factory: RendererFactory,
    cfg: Config | None = None,
) -> RendererRegistry:
    """
    Построить реестр рендереров по содержимому каталога.

    1. Каждая модель `<key><model_ext>` с текстурой `<key><texture_ext>`
       (или текстурой по умолчанию) попадает в model_renderers[key].
    2. Каждая текстура `<key><descriptor_ext>` на модели плоскости
       попадает в descriptor_renderers[key].
    3. Рендерер по умолчанию строится из фиксированной пары файлов.

    Ошибки отдельных файлов и нечитаемый каталог логируются и пропускаются.
    При повторе ключа побеждает последний файл.

    Args:
        directory: Каталог ассетов
        factory: Фабрика рендереров
        cfg: Конфигурация (по умолчанию глобальная)

    Returns:
        Неизменяемый реестр рендереров

    Raises:
        AssetBuildError: Если не удалось построить рендерер по умолчанию
    """
    cfg = cfg or default_config
    directory = Path(directory)
    logger.info("Building renderer registry from %s", directory)

    models: dict[str, ObjectRenderer] = {}
    descriptors: dict[str, ObjectRenderer] = {}
    failures: list[AssetBuildOutcome] = []

    try:
        failures += _collect("model", _scan_models(directory, factory, cfg), models)
    except ScanError as e:
        logger.error("Model scan failed: %s", e)

    try:
        failures += _collect("descriptor", _scan_descriptors(directory, factory, cfg), descriptors)
    except ScanError as e:
        logger.error("Descriptor scan failed: %s", e)

    fallback = create_renderer(
        factory,
        directory / cfg.assets.fallback_model,
        directory / cfg.assets.fallback_texture,
        cfg,
    )

    logger.info(
        "Registry ready: %d models, %d descriptors, %d failed",
        len(models),
        len(descriptors),
        len(failures),
    )
    return RendererRegistry(
        model_renderers=MappingProxyType(models),
        descriptor_renderers=MappingProxyType(descriptors),
        fallback_renderer=fallback,
        failures=tuple(failures),
    )
