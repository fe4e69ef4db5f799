"""Ключи ассетов из имени отслеживаемого изображения."""


def derive_keys(name: str, suffix: str = ".png", delimiter: str = "-") -> tuple[str, str]:
    """
    Получить полный ключ и ключ цвета из имени изображения.

    "group1-red.png" -> ("group1-red", "red").
    Без разделителя ключ цвета совпадает с полным ключом.
    Разбиение идёт по первому разделителю: "a-b-c" -> ("a-b-c", "b-c").

    Args:
        name: Имя изображения
        suffix: Отрезаемый суффикс
        delimiter: Разделитель группы и цвета

    Returns:
        (complete_key, color_key)
    """
    complete_key = name.removesuffix(suffix)
    color_key = complete_key[complete_key.find(delimiter) + 1:]
    return complete_key, color_key
