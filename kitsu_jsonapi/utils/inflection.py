"""Name transforms between application identifiers and JSON:API wire names."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping

from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from kitsu_jsonapi.config import JSONAPISettings

DEFAULT_IRREGULARS: Mapping[str, str] = MappingProxyType(
    {
        "alias": "aliases",
        "atlas": "atlases",
        "bias": "biases",
        "canvas": "canvases",
        "child": "children",
        "foot": "feet",
        "gas": "gases",
        "goose": "geese",
        "lens": "lenses",
        "man": "men",
        "mouse": "mice",
        "movie": "movies",
        "person": "people",
        "quiz": "quizzes",
        "tooth": "teeth",
        "woman": "women",
    }
)

DEFAULT_UNCOUNTABLES: frozenset[str] = frozenset(
    {
        "anime",
        "data",
        "equipment",
        "fish",
        "information",
        "manga",
        "media",
        "news",
        "series",
        "sheep",
        "species",
    }
)

# Word boundaries are case changes only; digits stay attached to their word.
_CASE_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

_VOWELS = "aeiou"
_SIBILANT_ENDINGS = ("s", "x", "z", "ch", "sh")


def _split_last_word(name: str) -> tuple[str, str]:
    """Split ``name`` into a prefix and its final word.

    Words are delimited by ``-``, ``_`` or an internal uppercase letter, so
    ``library-entry`` and ``libraryEntry`` both end in ``entry``/``Entry``.
    """
    index = max(name.rfind("-"), name.rfind("_")) + 1
    for position in range(len(name) - 1, index, -1):
        if name[position].isupper():
            index = position
            break
    return name[:index], name[index:]


def _match_case(source: str, replacement: str) -> str:
    if source[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


class Inflector:
    """English pluralisation with overridable irregular and uncountable tables."""

    def __init__(
        self,
        irregulars: Mapping[str, str] | None = None,
        uncountables: Iterable[str] | None = None,
    ) -> None:
        """Merge caller tables over the defaults (keys are singular, lowercase)."""
        merged = dict(DEFAULT_IRREGULARS)
        if irregulars:
            merged.update({key.lower(): value.lower() for key, value in irregulars.items()})
        self.irregulars: Mapping[str, str] = MappingProxyType(merged)
        self.irregular_plurals: Mapping[str, str] = MappingProxyType(
            {plural: singular for singular, plural in merged.items()}
        )
        words = set(DEFAULT_UNCOUNTABLES)
        if uncountables:
            words.update(word.lower() for word in uncountables)
        self.uncountables: frozenset[str] = frozenset(words)

    def pluralize(self, name: str) -> str:
        """Return the plural form of ``name``; plural input is returned as-is."""
        prefix, word = _split_last_word(name)
        if self._is_plural(word):
            return name
        return prefix + self._pluralize_word(word)

    def singularize(self, name: str) -> str:
        """Return the singular form of ``name``."""
        prefix, word = _split_last_word(name)
        return prefix + self._singularize_word(word)

    def _is_plural(self, word: str) -> bool:
        lower = word.lower()
        if lower in self.irregular_plurals:
            return True
        singular = self._singularize_word(word)
        return singular != word and self._pluralize_word(singular) == word

    def _pluralize_word(self, word: str) -> str:
        lower = word.lower()
        if not lower or lower in self.uncountables:
            return word
        if lower in self.irregulars:
            return _match_case(word, self.irregulars[lower])
        if lower.endswith("y") and len(lower) > 1 and lower[-2] not in _VOWELS:
            return word[:-1] + "ies"
        if lower.endswith(_SIBILANT_ENDINGS):
            return word + "es"
        return word + "s"

    def _singularize_word(self, word: str) -> str:
        lower = word.lower()
        if not lower or lower in self.uncountables:
            return word
        if lower in self.irregular_plurals:
            return _match_case(word, self.irregular_plurals[lower])
        if lower in self.irregulars:
            return word
        if lower.endswith("ies") and len(lower) > 3 and lower[-4] not in _VOWELS:
            return word[:-3] + "y"
        if lower.endswith(("sses", "xes", "ches", "shes", "zzes")):
            return word[:-2]
        # buses/statuses, but not houses/causes
        if lower.endswith("uses") and len(lower) > 4 and lower[-5] not in _VOWELS:
            return word[:-2]
        if lower.endswith(("ss", "us", "is")):
            return word
        if lower.endswith("s"):
            return word[:-1]
        return word


default_inflector = Inflector()


def pluralize(name: str, enabled: bool = True, *, inflector: Inflector | None = None) -> str:
    """Pluralise a model name (``libraryEntry`` -> ``libraryEntries``)."""
    if not enabled:
        return name
    return (inflector or default_inflector).pluralize(name)


def singularize(name: str, enabled: bool = True, *, inflector: Inflector | None = None) -> str:
    """Singularise a resource type name (``library-entries`` -> ``library-entry``)."""
    if not enabled:
        return name
    return (inflector or default_inflector).singularize(name)


def decamelize(name: str, enabled: bool = True) -> str:
    """Convert ``libraryEntries`` into the wire form ``library-entries``."""
    if not enabled:
        return name
    return _CASE_BOUNDARY.sub("-", name).replace("_", "-").lower()


def camelize(name: str, enabled: bool = True) -> str:
    """Convert the wire form ``library-entries`` back into ``libraryEntries``."""
    if not enabled or ("-" not in name and "_" not in name):
        return name
    return to_camel(name.replace("-", "_"))


def wire_type(
    model: str,
    settings: JSONAPISettings | None = None,
    *,
    inflector: Inflector | None = None,
) -> str:
    """Return the JSON:API ``type`` for an application model name."""
    decamelize_enabled, pluralize_enabled = _flags(settings)
    return pluralize(
        decamelize(model, decamelize_enabled), pluralize_enabled, inflector=inflector
    )


def model_name(
    type_: str,
    settings: JSONAPISettings | None = None,
    *,
    inflector: Inflector | None = None,
) -> str:
    """Return the application model name for a JSON:API ``type``."""
    decamelize_enabled, pluralize_enabled = _flags(settings)
    return camelize(
        singularize(type_, pluralize_enabled, inflector=inflector), decamelize_enabled
    )


def _flags(settings: JSONAPISettings | None) -> tuple[bool, bool]:
    if settings is None:
        return True, True
    return settings.decamelize, settings.pluralize
