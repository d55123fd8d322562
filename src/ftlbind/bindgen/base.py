"""Runtime base class of generated localizer types.

Generated modules define one subclass per build. The subclass adds one
method per default-language message and the build-time snapshot of
expected ids; everything that touches the holder lives here.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from ftlbind.localization import (
        LanguageBundle,
        LanguageTag,
        LocalizationHolder,
        QualifiedId,
    )
    from ftlbind.runtime import FluentValue

__all__ = ["LocalizerBase"]

logger = logging.getLogger(__name__)


class LocalizerBase:
    """Binds a LocalizationHolder to one runtime language.

    The holder is borrowed, not owned: it must outlive every localizer
    built on it. Instances are cheap; create one per language or per
    request as convenient.

    Attributes:
        EXPECTED_MESSAGES: Message ids present when the bindings were generated
        EXPECTED_TERMS: Term ids (``<resource>_-<key>``) present at generation
        EXPECTED_VALUES: Message ids that had a value, one accessor each
    """

    __slots__ = ("_holder", "_language")

    EXPECTED_MESSAGES: ClassVar[tuple[str, ...]] = ()
    EXPECTED_TERMS: ClassVar[tuple[str, ...]] = ()
    EXPECTED_VALUES: ClassVar[tuple[str, ...]] = ()

    def __init__(self, holder: LocalizationHolder, language: LanguageTag) -> None:
        self._holder = holder
        self._language = language

    @property
    def holder(self) -> LocalizationHolder:
        """The holder lookups go through."""
        return self._holder

    @property
    def language(self) -> LanguageTag:
        """Requested runtime language."""
        return self._language

    def __repr__(self) -> str:
        return f"{type(self).__name__}(language={self._language!r})"

    def localize(
        self,
        qualified_id: QualifiedId,
        args: Mapping[str, FluentValue] | None = None,
        *,
        attribute: str | None = None,
    ) -> str:
        """Render any message by qualified id, bypassing the typed accessors.

        Raises:
            MissingMessageError: If the id is absent from the default bundle
            RenderError: If rendering fails
        """
        return self._holder.format(self._language, qualified_id, args, attribute=attribute)

    def _localize(
        self, accessor: str, qualified_id: QualifiedId, args: Mapping[str, FluentValue]
    ) -> str:
        """Entry point of generated accessors."""
        return self._holder.format(self._language, qualified_id, args, accessor=accessor)

    def validate_default_bundle_complete(self) -> list[str]:
        """Check the loaded default bundle against the build-time snapshot.

        Every expected message and term id is checked; all gaps are
        reported together instead of stopping at the first. A message
        backing an accessor counts as missing when it has lost its value.

        Returns:
            Missing ids in snapshot order (messages first, then terms);
            empty when the loaded resources cover every accessor.
        """
        bundle = self._holder.default_bundle
        missing = [
            qid
            for qid in (*self.EXPECTED_MESSAGES, *self.EXPECTED_TERMS)
            if not self._has_expected_shape(bundle, qid)
        ]
        if missing:
            logger.warning(
                "Default bundle %s is missing %d of %d expected id(s): %s",
                bundle.language,
                len(missing),
                len(self.EXPECTED_MESSAGES) + len(self.EXPECTED_TERMS),
                ", ".join(missing),
            )
        else:
            logger.info(
                "Default bundle %s provides all %d expected id(s)",
                bundle.language,
                len(self.EXPECTED_MESSAGES) + len(self.EXPECTED_TERMS),
            )
        return missing

    def _has_expected_shape(self, bundle: LanguageBundle, qid: str) -> bool:
        message = bundle.get(qid)
        if message is None:
            return False
        return qid not in self.EXPECTED_VALUES or message.pattern is not None
