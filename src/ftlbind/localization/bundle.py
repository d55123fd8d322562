"""Per-language message bundles.

A LanguageBundle is the merged content of every resource file in one
language directory, keyed by qualified id ``<resource_name>_<key>``
(``<resource_name>_-<key>`` for terms). Bundles are built once and are
immutable afterwards.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from ftlbind.constants import FILE_EXTENSION, QUALIFIED_ID_SEPARATOR
from ftlbind.diagnostics import DuplicateKeyError
from ftlbind.syntax import Pattern, ResourceAttribute, ResourceEntry, parse_resource

from .types import FTLSource, LanguageTag, QualifiedId, ResourceName

__all__ = [
    "LanguageBundle",
    "Message",
    "build_language_bundle",
    "load_language_bundle",
    "qualified_id",
]

logger = logging.getLogger(__name__)


def qualified_id(resource_name: ResourceName, entry_key: str) -> QualifiedId:
    """Join a resource name and an entry key into a qualified id.

    Example:
        >>> qualified_id("base", "name")
        'base_name'
        >>> qualified_id("base", "-brand")
        'base_-brand'
    """
    return f"{resource_name}{QUALIFIED_ID_SEPARATOR}{entry_key}"


@dataclass(frozen=True, slots=True)
class Message:
    """One message or term of a bundle.

    Attributes:
        resource_name: File name without extension
        key: Entry key as used in references (``-brand`` for terms)
        template: Raw value template, None for attribute-only messages
        pattern: Parsed value, None for attribute-only messages
        attributes: Attributes keyed by name, in declaration order
        is_term: True for terms
        source: ``path:line`` of the definition
    """

    resource_name: ResourceName
    key: str
    template: str | None
    pattern: Pattern | None
    attributes: Mapping[str, ResourceAttribute]
    is_term: bool
    source: str

    @classmethod
    def from_entry(cls, resource_name: ResourceName, entry: ResourceEntry, path: str) -> Message:
        """Create a Message from a parsed resource entry."""
        return cls(
            resource_name=resource_name,
            key=entry.entry_key,
            template=entry.template,
            pattern=entry.pattern,
            attributes=MappingProxyType({a.name: a for a in entry.attributes}),
            is_term=entry.is_term,
            source=f"{path}:{entry.line}",
        )

    @property
    def qualified_id(self) -> QualifiedId:
        """``<resource_name>_<key>``."""
        return qualified_id(self.resource_name, self.key)

    def get_pattern(self, attribute: str | None = None) -> Pattern | None:
        """Return the value pattern, or an attribute's pattern when named."""
        if attribute is None:
            return self.pattern
        attr = self.attributes.get(attribute)
        return attr.pattern if attr is not None else None


class LanguageBundle:
    """Immutable mapping from qualified id to Message for one language.

    Iteration yields qualified ids in load order: resource files sorted by
    name, entries in declaration order.
    """

    __slots__ = ("_by_key", "_language", "_messages", "_source_dir")

    def __init__(
        self,
        language: LanguageTag,
        messages: Iterable[Message],
        *,
        source_dir: str | None = None,
    ) -> None:
        """Index messages, rejecting duplicate qualified ids.

        Raises:
            DuplicateKeyError: If two messages share a qualified id
        """
        index: dict[QualifiedId, Message] = {}
        by_key: dict[str, list[ResourceName]] = {}
        for message in messages:
            existing = index.get(message.qualified_id)
            if existing is not None:
                raise DuplicateKeyError(
                    message.qualified_id, language, [existing.source, message.source]
                )
            index[message.qualified_id] = message
            by_key.setdefault(message.key, []).append(message.resource_name)

        self._language = language
        self._messages: Mapping[QualifiedId, Message] = MappingProxyType(index)
        self._by_key: Mapping[str, tuple[ResourceName, ...]] = MappingProxyType(
            {key: tuple(names) for key, names in by_key.items()}
        )
        self._source_dir = source_dir

    @property
    def language(self) -> LanguageTag:
        """Language tag of this bundle."""
        return self._language

    @property
    def source_dir(self) -> str | None:
        """Directory the bundle was loaded from, if any."""
        return self._source_dir

    @property
    def messages(self) -> Mapping[QualifiedId, Message]:
        """Read-only view of all entries (messages and terms)."""
        return self._messages

    def message_ids(self) -> tuple[QualifiedId, ...]:
        """Qualified ids of messages (terms excluded), in load order."""
        return tuple(qid for qid, m in self._messages.items() if not m.is_term)

    def term_ids(self) -> tuple[QualifiedId, ...]:
        """Qualified ids of terms (``<resource>_-<key>``), in load order."""
        return tuple(qid for qid, m in self._messages.items() if m.is_term)

    def get(self, qid: QualifiedId) -> Message | None:
        """Look up an entry by qualified id."""
        return self._messages.get(qid)

    def resources_defining(self, key: str) -> tuple[ResourceName, ...]:
        """Resource names that define ``key`` (``-name`` for terms), in load order."""
        return self._by_key.get(key, ())

    def find_entry(self, key: str, resource_name: ResourceName) -> Message | None:
        """Resolve a reference made from ``resource_name`` to ``key``.

        The referencing resource is searched first; otherwise the key must be
        defined by exactly one resource of the bundle.

        Returns:
            The entry, or None if no resource (or more than one) defines it
        """
        local = self._messages.get(qualified_id(resource_name, key))
        if local is not None:
            return local
        candidates = self.resources_defining(key)
        if len(candidates) != 1:
            return None
        return self._messages[qualified_id(candidates[0], key)]

    def __contains__(self, qid: object) -> bool:
        return qid in self._messages

    def __iter__(self) -> Iterator[QualifiedId]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"LanguageBundle(language={self._language!r}, entries={len(self._messages)})"


def build_language_bundle(
    language: LanguageTag,
    resources: Mapping[ResourceName, FTLSource],
    *,
    source_dir: str | None = None,
) -> LanguageBundle:
    """Build a bundle from in-memory resource texts.

    Args:
        language: Language tag of the bundle
        resources: Resource text keyed by resource name (file name without
            extension); processed in sorted name order
        source_dir: Directory the texts came from, for diagnostics

    Raises:
        ParseError: If a resource is malformed
        DuplicateKeyError: If a qualified id is defined twice

    Example:
        >>> bundle = build_language_bundle("en_US", {"base": "name = English"})
        >>> bundle.get("base_name").template
        'English'
    """
    messages: list[Message] = []
    for resource_name in sorted(resources):
        path = (
            str(Path(source_dir) / f"{resource_name}{FILE_EXTENSION}")
            if source_dir is not None
            else f"{resource_name}{FILE_EXTENSION}"
        )
        entries = parse_resource(resources[resource_name], source_path=path)
        messages.extend(Message.from_entry(resource_name, entry, path) for entry in entries)
    bundle = LanguageBundle(language, messages, source_dir=source_dir)
    logger.debug(
        "Built bundle %s: %d entries from %d resources", language, len(bundle), len(resources)
    )
    return bundle


def load_language_bundle(directory: Path | str, language: LanguageTag) -> LanguageBundle:
    """Load every resource file of a language directory into a bundle.

    Only regular files with the resource extension are read; anything else
    is skipped (files with a warning, sub-directories silently).

    Raises:
        OSError: If the directory or a file cannot be read
        UnicodeDecodeError: If a file is not valid UTF-8
        ParseError: If a resource is malformed
        DuplicateKeyError: If a qualified id is defined twice
    """
    directory = Path(directory)
    resources: dict[ResourceName, FTLSource] = {}
    for path in sorted(directory.iterdir()):
        if path.is_dir():
            logger.debug("Skipping sub-directory %s", path)
            continue
        if path.suffix != FILE_EXTENSION:
            logger.warning("Skipping non-resource file %s", path)
            continue
        logger.debug("Reading resource %s", path)
        resources[path.stem] = path.read_text(encoding="utf-8")
    return build_language_bundle(language, resources, source_dir=str(directory))
