"""LocalizationHolder: read-only registry of language bundles with fallback.

The holder owns one LanguageBundle per loaded language plus the designated
default language. It is created once at startup (``load``), never mutated
afterwards, and shared freely between threads: all lookups are reads of
immutable mappings, so no locking is needed.

Directory layout::

    <root_dir>/
        en_US/base.ftl
        fr_FR/base.ftl
        default/            # alias of the default language (symlink or copy)

Lookup policy (``resolve``): the requested language's entry if that
language is loaded and defines the id, otherwise the default language's
entry, otherwise MissingMessageError (build skew, not a recoverable miss).

Python 3.13+. Depends on Babel (via the runtime) for formatting.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from types import MappingProxyType

from ftlbind.constants import DEFAULT_DIR
from ftlbind.diagnostics import (
    LocalizationError,
    MissingDefaultLanguageError,
    MissingMessageError,
    RenderError,
    ResolutionError,
)
from ftlbind.enums import LoadStatus
from ftlbind.locale_utils import is_language_tag
from ftlbind.runtime import (
    FluentValue,
    FunctionRegistry,
    ReferenceScope,
    ResolvedReference,
    TemplateRenderer,
)
from ftlbind.syntax import MessageReference, Pattern, TermReference

from .bundle import LanguageBundle, Message, load_language_bundle
from .config import LocalizationConfig
from .loading import LanguageLoadResult, LoadSummary
from .types import LanguageTag, QualifiedId, ResourceName

__all__ = ["LocalizationHolder"]

logger = logging.getLogger(__name__)


class LocalizationHolder:
    """Registry of language bundles with fallback to a default language.

    Invariant: the default language's bundle is always present.

    Example:
        >>> holder = LocalizationHolder.load("localizations", "en_US")
        >>> holder.format("fr_FR", "base_counter", {"counter": 2})
        'compteur : 2'
    """

    __slots__ = (
        "_bundles",
        "_default_language",
        "_load_summary",
        "_renderers",
        "_root_dir",
    )

    def __init__(
        self,
        bundles: Mapping[LanguageTag, LanguageBundle],
        default_language: LanguageTag,
        *,
        use_isolating: bool = False,
        functions: FunctionRegistry | None = None,
        load_summary: LoadSummary | None = None,
        root_dir: str | None = None,
    ) -> None:
        """Create a holder from already built bundles.

        Most callers use ``load``; this constructor serves tests and callers
        that build bundles themselves.

        Raises:
            MissingDefaultLanguageError: If no bundle exists for default_language
        """
        if default_language not in bundles:
            raise MissingDefaultLanguageError(
                default_language, root_dir or "<memory>", "no bundle for the default language"
            )
        ordered = {language: bundles[language] for language in sorted(bundles)}
        self._bundles: Mapping[LanguageTag, LanguageBundle] = MappingProxyType(ordered)
        self._default_language = default_language
        self._renderers: Mapping[LanguageTag, TemplateRenderer] = MappingProxyType(
            {
                language: TemplateRenderer(
                    language, functions=functions, use_isolating=use_isolating
                )
                for language in ordered
            }
        )
        self._load_summary = load_summary or LoadSummary(
            tuple(
                LanguageLoadResult(
                    language,
                    bundle.source_dir or "<memory>",
                    LoadStatus.SUCCESS,
                    message_count=len(bundle),
                )
                for language, bundle in ordered.items()
            )
        )
        self._root_dir = root_dir

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        root_dir: Path | str,
        default_language: LanguageTag,
        *,
        max_workers: int | None = None,
        use_isolating: bool = False,
        functions: FunctionRegistry | None = None,
    ) -> LocalizationHolder:
        """Load every language directory under root_dir.

        A language whose directory fails to load is logged, recorded in
        ``load_summary`` and left out; the other languages still load. The
        ``default`` directory stands in for the default language only when
        no directory is named after it.

        Args:
            root_dir: Directory containing one sub-directory per language
            default_language: Language every lookup falls back to
            max_workers: Thread pool size (1 = load sequentially)
            use_isolating: Wrap interpolated values in Unicode bidi marks
            functions: Function registry for rendering (default: built-ins)

        Raises:
            MissingDefaultLanguageError: If the default language is absent or
                failed to load
        """
        root = Path(root_dir)
        if not root.is_dir():
            raise MissingDefaultLanguageError(
                default_language, str(root), "root directory does not exist"
            )

        candidates = _discover_languages(root, default_language)
        logger.info(
            "Loading %d language(s) from %s: %s", len(candidates), root, ", ".join(candidates)
        )

        if max_workers == 1 or len(candidates) <= 1:
            results = [_load_one(language, path) for language, path in candidates.items()]
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [
                    executor.submit(_load_one, language, path)
                    for language, path in candidates.items()
                ]
                results = [future.result() for future in futures]

        # Merge in language order regardless of completion order
        results.sort(key=lambda pair: pair[0].language)
        summary = LoadSummary(tuple(result for result, _ in results))
        bundles = {result.language: bundle for result, bundle in results if bundle is not None}

        if default_language not in bundles:
            failure = summary.get_by_language(default_language)
            detail = (
                str(failure.error)
                if failure is not None and failure.error is not None
                else f"no '{default_language}' or '{DEFAULT_DIR}' directory"
            )
            error = MissingDefaultLanguageError(default_language, str(root), detail)
            if failure is not None and failure.error is not None:
                raise error from failure.error
            raise error

        logger.info(
            "Loaded %d of %d language(s); default is %s",
            summary.successful,
            summary.total_attempted,
            default_language,
        )
        return cls(
            bundles,
            default_language,
            use_isolating=use_isolating,
            functions=functions,
            load_summary=summary,
            root_dir=str(root),
        )

    @classmethod
    def from_config(
        cls, config: LocalizationConfig, *, functions: FunctionRegistry | None = None
    ) -> LocalizationHolder:
        """Load using a LocalizationConfig."""
        return cls.load(
            config.root_dir,
            config.default_language,
            max_workers=config.max_workers,
            use_isolating=config.use_isolating,
            functions=functions,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LocalizationHolder:
        """Load using TRANSLATION_DIR and DEFAULT_LANG."""
        return cls.from_config(LocalizationConfig.from_env(environ))

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    @property
    def default_language(self) -> LanguageTag:
        """The language every lookup falls back to."""
        return self._default_language

    @property
    def default_bundle(self) -> LanguageBundle:
        """Bundle of the default language (always present)."""
        return self._bundles[self._default_language]

    @property
    def languages(self) -> tuple[LanguageTag, ...]:
        """Loaded language tags, sorted."""
        return tuple(self._bundles)

    @property
    def load_summary(self) -> LoadSummary:
        """Per-language load outcomes, including languages that failed."""
        return self._load_summary

    @property
    def root_dir(self) -> str | None:
        """Directory the holder was loaded from, if any."""
        return self._root_dir

    def has_language(self, language: LanguageTag) -> bool:
        """Check whether a bundle is loaded for ``language``."""
        return language in self._bundles

    def get_bundle(self, language: LanguageTag) -> LanguageBundle | None:
        """Return the bundle for ``language``, or None if not loaded."""
        return self._bundles.get(language)

    def _lookup_chain(self, language: LanguageTag) -> Iterator[LanguageBundle]:
        """Bundles to consult for ``language``: its own (if loaded), then the default."""
        bundle = self._bundles.get(language)
        if bundle is not None:
            yield bundle
        if language != self._default_language:
            yield self.default_bundle

    # ------------------------------------------------------------------
    # Lookup and rendering
    # ------------------------------------------------------------------

    def resolve(self, language: LanguageTag, qualified_id: QualifiedId) -> Message:
        """Return the entry for ``qualified_id`` in ``language``, with fallback.

        Raises:
            MissingMessageError: If even the default bundle lacks the id
        """
        bundle = self._bundles.get(language)
        if bundle is not None:
            message = bundle.get(qualified_id)
            if message is not None:
                return message

        message = self.default_bundle.get(qualified_id)
        if message is None:
            raise MissingMessageError(qualified_id, language, self._default_language)
        if language != self._default_language:
            logger.debug(
                "Falling back to %s for %s (requested %s)",
                self._default_language,
                qualified_id,
                language,
            )
        return message

    def format(
        self,
        language: LanguageTag,
        qualified_id: QualifiedId,
        args: Mapping[str, FluentValue] | None = None,
        *,
        attribute: str | None = None,
        accessor: str | None = None,
    ) -> str:
        """Render a message (or one of its attributes) for ``language``.

        Args:
            language: Requested language
            qualified_id: ``<resource_name>_<key>``
            args: Variable values keyed by variable name
            attribute: Render this attribute instead of the value
            accessor: Name reported in RenderError (default: qualified_id)

        Raises:
            MissingMessageError: If the id is absent from the default bundle
            RenderError: If rendering fails
        """
        message, pattern = self._resolve_pattern(language, qualified_id, attribute)
        key = qualified_id if attribute is None else f"{qualified_id}.{attribute}"
        if pattern is None:
            part = "value" if attribute is None else f"attribute '{attribute}'"
            cause = ResolutionError(f"Message '{qualified_id}' has no {part}")
            raise RenderError(accessor or key, qualified_id, language, cause)

        renderer = self._renderers[self._bundle_language_of(message, language)]
        scope = _HolderScope(self, language, message.resource_name)
        try:
            return renderer.render(pattern, args, scope=scope, key=key)
        except ResolutionError as e:
            raise RenderError(accessor or key, qualified_id, language, e) from e

    def _resolve_pattern(
        self, language: LanguageTag, qualified_id: QualifiedId, attribute: str | None
    ) -> tuple[Message, Pattern | None]:
        """Find the pattern to render, falling back per attribute as well as per message."""
        message = self.resolve(language, qualified_id)
        pattern = message.get_pattern(attribute)
        if pattern is None and attribute is not None:
            fallback = self.default_bundle.get(qualified_id)
            if fallback is not None and fallback.get_pattern(attribute) is not None:
                return fallback, fallback.get_pattern(attribute)
        return message, pattern

    def _bundle_language_of(self, message: Message, requested: LanguageTag) -> LanguageTag:
        """Language whose bundle supplied ``message`` (for plural rules and formatting)."""
        bundle = self._bundles.get(requested)
        if bundle is not None and bundle.get(message.qualified_id) is message:
            return requested
        return self._default_language

    def __repr__(self) -> str:
        return (
            f"LocalizationHolder(languages={list(self._bundles)!r}, "
            f"default_language={self._default_language!r})"
        )


class _HolderScope(ReferenceScope):
    """Resolves references made from one resource of one requested language."""

    __slots__ = ("_holder", "_language", "_resource_name")

    def __init__(
        self, holder: LocalizationHolder, language: LanguageTag, resource_name: ResourceName
    ) -> None:
        self._holder = holder
        self._language = language
        self._resource_name = resource_name

    def find(self, reference: MessageReference | TermReference) -> ResolvedReference | None:
        is_term = isinstance(reference, TermReference)
        key = f"-{reference.id.name}" if is_term else reference.id.name
        attribute = reference.attribute.name if reference.attribute else None

        ambiguity: str | None = None
        for bundle in self._holder._lookup_chain(self._language):
            message = bundle.find_entry(key, self._resource_name)
            if message is None and ambiguity is None and len(bundle.resources_defining(key)) > 1:
                candidates = ", ".join(bundle.resources_defining(key))
                ambiguity = (
                    f"Reference '{key}' is ambiguous in {bundle.language}: "
                    f"defined in {candidates}"
                )
            if message is None:
                continue
            pattern = message.get_pattern(attribute)
            if pattern is None:
                continue
            ref_key = message.qualified_id if attribute is None else (
                f"{message.qualified_id}.{attribute}"
            )
            scope = _HolderScope(self._holder, self._language, message.resource_name)
            return ResolvedReference(ref_key, pattern, scope)
        if ambiguity is not None:
            raise ResolutionError(ambiguity)
        return None


def _discover_languages(root: Path, default_language: LanguageTag) -> dict[LanguageTag, Path]:
    """Map language tags to directories, applying the ``default`` alias rule."""
    candidates: dict[LanguageTag, Path] = {}
    default_dir: Path | None = None
    for path in sorted(root.iterdir()):
        if not path.is_dir():
            logger.debug("Skipping non-directory %s", path)
            continue
        if path.name == DEFAULT_DIR:
            default_dir = path
            continue
        if not is_language_tag(path.name):
            logger.warning("Skipping %s: not a language tag", path)
            continue
        candidates[path.name] = path

    if default_dir is not None:
        if default_language in candidates:
            logger.debug(
                "Ignoring %s at runtime; %s has its own directory", default_dir, default_language
            )
        else:
            logger.info("Using %s for default language %s", default_dir, default_language)
            candidates[default_language] = default_dir
    return dict(sorted(candidates.items()))


def _load_one(
    language: LanguageTag, path: Path
) -> tuple[LanguageLoadResult, LanguageBundle | None]:
    """Load one language, converting its failure into a result record."""
    try:
        bundle = load_language_bundle(path, language)
    except (LocalizationError, OSError, UnicodeDecodeError) as e:
        logger.error("Language %s unavailable: %s", language, e)
        return LanguageLoadResult(language, str(path), LoadStatus.ERROR, error=e), None
    logger.debug("Loaded %s: %d entries", language, len(bundle))
    return (
        LanguageLoadResult(language, str(path), LoadStatus.SUCCESS, message_count=len(bundle)),
        bundle,
    )
