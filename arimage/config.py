from pydantic import BaseModel, Field


class AssetConfig(BaseModel):
    """Файловая раскладка ассетов"""
    directory: str = Field(".", description="Каталог с моделями и текстурами")

    # Расширения по категориям
    model_extension: str = Field(".obj", min_length=2, description="Расширение 3D-моделей")
    texture_extension: str = Field(".png", min_length=2, description="Расширение текстур моделей")
    descriptor_extension: str = Field(".webp", min_length=2, description="Расширение текстур-описаний")

    # Фиксированные файлы
    plane_model: str = Field("plane.obj", description="Модель плоскости для описаний")
    fallback_model: str = Field("andy.obj", description="Модель по умолчанию")
    fallback_texture: str = Field("andy.png", description="Текстура модели по умолчанию")
    default_texture: str | None = Field(
        None, description="Текстура для модели без парной текстуры (None = fallback_texture)"
    )


class MaterialConfig(BaseModel):
    """Свойства материала, применяемые к каждому рендереру"""
    ambient: float = Field(0.0, ge=0.0, description="Фоновое освещение")
    diffuse: float = Field(3.5, ge=0.0, description="Диффузное отражение")
    specular: float = Field(1.0, ge=0.0, description="Зеркальное отражение")
    specular_power: float = Field(6.0, ge=0.0, description="Степень блика")


class TintConfig(BaseModel):
    """Палитра подкраски оверлеев"""
    intensity: float = Field(0.1, ge=0.0, le=1.0, description="Множитель яркости подкраски")
    alpha: float = Field(1.0, ge=0.0, le=1.0, description="Альфа-канал подкраски")
    palette: list[int] = Field(
        default_factory=lambda: [
            0x000000, 0xF44336, 0xE91E63, 0x9C27B0, 0x673AB7, 0x3F51B5, 0x2196F3, 0x03A9F4,
            0x00BCD4, 0x009688, 0x4CAF50, 0x8BC34A, 0xCDDC39, 0xFFEB3B, 0xFFC107, 0xFF9800,
        ],
        min_length=1,
        description="Базовые цвета в формате 0xRRGGBB",
    )


class DispatchConfig(BaseModel):
    """Выбор и размещение оверлея для отслеживаемого изображения"""
    # Разбор имени изображения
    name_suffix: str = Field(".png", description="Суффикс, отрезаемый от имени изображения")
    key_delimiter: str = Field("-", min_length=1, max_length=1, description="Разделитель группы и цвета")

    # Масштабы
    model_scale: float = Field(0.4, gt=0.0, description="Масштаб основной модели")
    descriptor_scale: float = Field(0.2, gt=0.0, description="Масштаб плоскости-описания")

    # Размещение описания относительно якоря
    descriptor_offset_factor: float = Field(-0.5, description="Сдвиг по X в долях extent_x")
    descriptor_rotation_deg: float = Field(45.0, description="Поворот описания вокруг Z (градусы)")


class Config(BaseModel):
    """Главная конфигурация"""
    assets: AssetConfig = AssetConfig()
    material: MaterialConfig = MaterialConfig()
    tint: TintConfig = TintConfig()
    dispatch: DispatchConfig = DispatchConfig()


# Глобальный экземпляр конфигурации
config = Config()
