"""Поиск файлов ассетов в каталоге."""

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

from arimage.errors import ScanError

logger = logging.getLogger(__name__)

PathPredicate = Callable[[Path], bool]


def has_extension(extension: str) -> PathPredicate:
    """
    Предикат "имя файла оканчивается на расширение".

    Args:
        extension: Расширение с точкой, например ".obj"

    Returns:
        Функция-предикат для scan()
    """

    def predicate(path: Path) -> bool:
        return path.name.endswith(extension) and path.name != extension

    return predicate


def asset_key(path: Path, extension: str) -> str:
    """Ключ ассета: имя файла без расширения."""
    return path.name.removesuffix(extension)


def scan(directory: str | Path, predicate: PathPredicate) -> Iterator[Path]:
    """
    Перечислить файлы каталога, подходящие под предикат.

    Каталог открывается сразу, а файлы отдаются лениво, за один проход.

    Args:
        directory: Каталог для сканирования
        predicate: Фильтр путей

    Returns:
        Итератор путей к файлам

    Raises:
        ScanError: Если каталог не удалось прочитать
            (при открытии сразу, при чтении записей - во время обхода)
    """
    directory = Path(directory)
    try:
        entries = os.scandir(directory)
    except OSError as e:
        raise ScanError(directory, e.strerror or str(e)) from e

    logger.debug("Scanning %s", directory)
    return _iter_matches(directory, entries, predicate)


def _iter_matches(
    directory: Path, entries: "os.ScandirIterator[str]", predicate: PathPredicate
) -> Iterator[Path]:
    with entries:
        try:
            for entry in entries:
                if not entry.is_file():
                    continue
                path = Path(entry.path)
                if predicate(path):
                    yield path
        except OSError as e:
            raise ScanError(directory, e.strerror or str(e)) from e
