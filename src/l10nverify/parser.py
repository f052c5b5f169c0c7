import glob
import logging
import os
import pathlib
from collections.abc import Iterable

from jproperties import ParseError, Properties

from l10nverify.analysis import build_translation_classes
from l10nverify.classes import (
    AuthoritativeTranslationFile,
    Locale,
    TranslatedFile,
)
from l10nverify.errors import TranslationFileError

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


def parse_locale(path: str) -> Locale | None:
    """Derive the locale from a ``<name>[_<lang>[_<region>]].<ext>`` filename."""
    filename = os.path.basename(path)
    underscore_pos = filename.find("_")
    if underscore_pos < 0:
        return None

    period_pos = filename.find(".", underscore_pos + 1)
    if period_pos < 0:
        period_pos = len(filename)
    span = filename[underscore_pos + 1 : period_pos]

    language, _, region = span.partition("_")
    if not language:
        return None
    return Locale(language, region or None)


def find_duplicate_keys(path: str, encoding: str = DEFAULT_ENCODING) -> frozenset[str]:
    duplicate_keys: set[str] = set()
    seen_keys: set[str] = set()
    try:
        with open(path, "r", encoding=encoding) as file:
            for line in file:
                line = line.rstrip("\r\n")
                # Skip blank lines and comments
                if not line.strip() or line.strip().startswith("#"):
                    continue

                equals_pos = line.find("=")
                # Don't let invalid lines stop parsing
                if equals_pos < 0:
                    continue

                key = line[:equals_pos]
                if key in seen_keys:
                    duplicate_keys.add(key)
                else:
                    seen_keys.add(key)
    except (OSError, UnicodeDecodeError) as ex:
        raise TranslationFileError(path, "Failed to read translation file") from ex
    return frozenset(duplicate_keys)


def load_translation_keys(path: str, encoding: str = DEFAULT_ENCODING) -> frozenset[str]:
    properties = Properties()
    try:
        with open(path, "rb") as file:
            properties.load(file, encoding)
    except (OSError, UnicodeDecodeError, ParseError) as ex:
        raise TranslationFileError(path, "Failed to load translation file") from ex
    return frozenset(properties)


def parse(
    path: str, encoding: str = DEFAULT_ENCODING
) -> tuple[frozenset[str], frozenset[str]]:
    logger.debug(f"Parsing {path}")
    return load_translation_keys(path, encoding), find_duplicate_keys(path, encoding)


def diff_keys(
    authoritative: Iterable[str], candidate: Iterable[str]
) -> tuple[frozenset[str], frozenset[str]]:
    """Return ``(missing, extra)`` of the candidate against the authority."""
    authoritative = frozenset(authoritative)
    candidate = frozenset(candidate)
    return authoritative - candidate, candidate - authoritative


def parse_authoritative(
    path: str, encoding: str = DEFAULT_ENCODING
) -> AuthoritativeTranslationFile:
    keys, duplicate_keys = parse(path, encoding)
    return AuthoritativeTranslationFile(
        path=path,
        locale=parse_locale(path),
        keys=keys,
        duplicate_keys=duplicate_keys,
        translation_classes=tuple(build_translation_classes(keys)),
    )


def parse_translations(
    authoritative: AuthoritativeTranslationFile,
    paths: Iterable[str],
    encoding: str = DEFAULT_ENCODING,
) -> list[TranslatedFile]:
    authoritative_path = pathlib.Path(authoritative.path).resolve()
    translated = []
    for path in paths:
        # The authoritative file is not a translation of itself
        if pathlib.Path(path).resolve() == authoritative_path:
            continue

        keys, duplicate_keys = parse(path, encoding)
        missing_keys, extra_keys = diff_keys(authoritative.keys, keys)
        translated.append(
            TranslatedFile(
                path=path,
                locale=parse_locale(path),
                keys=keys,
                duplicate_keys=duplicate_keys,
                missing_keys=missing_keys,
                extra_keys=extra_keys,
            )
        )
    return translated


def discover_translations(
    base_dir: str, pattern: str, authoritative_path: str
) -> list[str]:
    authoritative = pathlib.Path(authoritative_path).resolve()
    found = []
    for match in glob.glob(os.path.join(base_dir, pattern), recursive=True):
        file = pathlib.Path(match)
        if not file.is_file() or file.resolve() == authoritative:
            continue
        found.append(str(file))
    return sorted(found, key=lambda p: (os.path.basename(p), p))
