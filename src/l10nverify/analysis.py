import logging
from collections.abc import Iterable

from l10nverify.classes import (
    ClassinessResults,
    MissingClass,
    MissingKey,
    TranslationClass,
)
from l10nverify.resolvers import SymbolResolver

logger = logging.getLogger(__name__)


def sanitize_class_name(class_name: str) -> str:
    """Turn a dotted key prefix into a resolvable class name.

    Lowercase segments are treated as the package, the first other segment as
    the top-level class and any later ones as nested classes, joined with
    ``$``: ``com.example.Foo.Nested`` becomes ``com.example.Foo$Nested``.
    """
    parts = class_name.split(".")
    if len(parts) < 2:
        return class_name

    package_components = []
    root_class_name = None
    nested_class_names = []
    for part in parts:
        if part == part.lower():
            package_components.append(part)
        elif root_class_name is None:
            root_class_name = part
        else:
            nested_class_names.append(part)

    # Nothing class-like to split on
    if root_class_name is None:
        return class_name

    qualified = ".".join(package_components) + "." + root_class_name
    if nested_class_names:
        qualified += "$" + "$".join(nested_class_names)
    return qualified


def build_translation_classes(keys: Iterable[str]) -> list[TranslationClass]:
    staging: dict[str, set[str]] = {}
    for key in sorted(keys):
        last_period_pos = key.rfind(".")
        if last_period_pos < 0:
            continue

        class_name = sanitize_class_name(key[:last_period_pos])
        staging.setdefault(class_name, set()).add(key[last_period_pos + 1 :])

    return [
        TranslationClass(class_name, frozenset(key_names))
        for class_name, key_names in staging.items()
    ]


def analyze_classiness(
    translation_classes: Iterable[TranslationClass], resolver: SymbolResolver
) -> ClassinessResults:
    results = ClassinessResults()
    for translation_class in translation_classes:
        class_name = translation_class.class_name
        if not resolver.class_exists(class_name):
            logger.debug(f"The translation key class {class_name} was not found.")
            results.missing_classes.append(MissingClass(class_name))
            continue

        for key_name in sorted(translation_class.key_names):
            if not resolver.member_exists(class_name, key_name):
                logger.debug(
                    f"The translation key {key_name} for class {class_name} was not found."
                )
                results.missing_keys.append(MissingKey(class_name, key_name))
    return results
