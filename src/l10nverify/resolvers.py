import enum
import importlib
import inspect
import logging
import sys
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

import yaml

from l10nverify.errors import ResolutionError

logger = logging.getLogger(__name__)


class SymbolResolver(Protocol):
    def class_exists(self, class_name: str) -> bool: ...

    def member_exists(self, class_name: str, member_name: str) -> bool: ...


class StaticSymbolResolver:
    """Answers lookups from a fixed ``class name -> members`` table."""

    def __init__(self, symbols: Mapping[str, Iterable[str]]) -> None:
        self.symbols = {name: frozenset(members or ()) for name, members in symbols.items()}

    @classmethod
    def from_yaml(cls, path: str) -> "StaticSymbolResolver":
        try:
            with open(path, "r", encoding="utf-8") as file:
                symbols = yaml.safe_load(file)
        except (OSError, yaml.YAMLError) as ex:
            raise ResolutionError(f"Failed to load symbol catalog {path}: {ex}") from ex

        if symbols is None:
            symbols = {}
        if not isinstance(symbols, dict):
            raise ResolutionError(
                f"Symbol catalog {path} must map class names to member lists"
            )
        logger.debug(f"Loaded {len(symbols)} classes from {path}")
        return cls(symbols)

    def class_exists(self, class_name: str) -> bool:
        return class_name in self.symbols

    def member_exists(self, class_name: str, member_name: str) -> bool:
        return member_name in self.symbols.get(class_name, ())


class ModuleSymbolResolver:
    """Looks up classes by importing them.

    ``pkg.mod.Outer$Inner`` is resolved by importing ``pkg.mod`` and walking
    the ``Outer`` and ``Inner`` attributes. A member exists only when it is
    declared on the class itself, not inherited. Names whose module part is
    not a dotted identifier, such as ``.x.Foo``, never resolve.

    Search paths are prepended to the process-wide ``sys.path`` and stay
    there for the life of the interpreter.
    """

    def __init__(self, search_paths: Iterable[str] = ()) -> None:
        self.search_paths = [str(p) for p in search_paths]
        self._classes: dict[str, type | None] = {}
        for path in reversed(self.search_paths):
            if path not in sys.path:
                sys.path.insert(0, path)
        importlib.invalidate_caches()

    def _import_module(self, module_name: str) -> Any:
        try:
            return importlib.import_module(module_name)
        except ModuleNotFoundError as ex:
            # Only a missing module on the requested path is a negative answer
            if ex.name and (module_name == ex.name or module_name.startswith(ex.name + ".")):
                return None
            raise ResolutionError(f"Failed to import {module_name}: {ex}") from ex
        except Exception as ex:
            raise ResolutionError(f"Failed to import {module_name}: {ex}") from ex

    def _load_class(self, class_name: str) -> type | None:
        if class_name in self._classes:
            return self._classes[class_name]

        outer, *nested = class_name.split("$")
        module_name, _, top_level = outer.rpartition(".")
        found = None
        if all(part.isidentifier() for part in module_name.split(".")):
            obj = self._import_module(module_name)
            for attribute in [top_level, *nested]:
                if obj is None:
                    break
                obj = getattr(obj, attribute, None)
            if inspect.isclass(obj):
                found = obj

        self._classes[class_name] = found
        return found

    def class_exists(self, class_name: str) -> bool:
        return self._load_class(class_name) is not None

    def member_exists(self, class_name: str, member_name: str) -> bool:
        clazz = self._load_class(class_name)
        if clazz is None:
            return False

        if member_name in vars(clazz) or member_name in inspect.get_annotations(clazz):
            return True
        if isinstance(clazz, enum.EnumMeta):
            return member_name in clazz.__members__
        return False
