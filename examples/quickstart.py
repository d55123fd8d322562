"""Quickstart example for ftlbind.

Writes a small localization tree to a temporary directory, generates the
typed bindings for it as a module file, imports that module, loads the
holder and renders a few messages.

WARNING: Examples use use_isolating=False for cleaner terminal output.
Enable bidi isolation in applications that display right-to-left languages.

Python 3.13+.
"""

import importlib
import sys
import tempfile
from pathlib import Path

from ftlbind import LocalizationHolder, generate_bindings

EN_US = """\
name = English
counter = count is at {$counter}
emails = { $count ->
    [0] no new emails
    [one] one new email
   *[other] { NUMBER($count) } new emails
}
login = Sign in
    .title = Sign in to { -brand }
-brand = Acme
"""

FR_FR = """\
name = Français
counter = compteur : {$counter}
"""

with tempfile.TemporaryDirectory() as tmp:
    build_dir = Path(tmp)
    root = build_dir / "localizations"
    (root / "en_US").mkdir(parents=True)
    (root / "fr_FR").mkdir()
    (root / "en_US" / "base.ftl").write_text(EN_US, encoding="utf-8")
    (root / "fr_FR" / "base.ftl").write_text(FR_FR, encoding="utf-8")

    # Example 1: Generated bindings
    print("=" * 50)
    print("Example 1: Generated Bindings")
    print("=" * 50)

    source = generate_bindings(root / "en_US")
    print(source)
    (build_dir / "quickstart_l10n.py").write_text(source, encoding="utf-8")

    # Example 2: Typed accessors
    print("=" * 50)
    print("Example 2: Typed Accessors")
    print("=" * 50)

    sys.path.insert(0, str(build_dir))
    importlib.invalidate_caches()
    bindings = importlib.import_module("quickstart_l10n")
    holder = LocalizationHolder.load(root, "en_US")

    english = bindings.LanguageLocalizer(holder, "en_US")
    print(english.base_name())
    # Output: English
    print(english.base_counter(2))
    # Output: count is at 2
    print(english.base_emails(1250))
    # Output: 1,250 new emails

    # Example 3: Fallback to the default language
    print("\n" + "=" * 50)
    print("Example 3: Fallback")
    print("=" * 50)

    french = bindings.LanguageLocalizer(holder, "fr_FR")
    print(french.base_name())
    # Output: Français
    print(french.base_emails(0))
    # Output: no new emails (from en_US)

    # Example 4: Attributes through the untyped escape hatch
    print("\n" + "=" * 50)
    print("Example 4: Attributes")
    print("=" * 50)

    print(french.localize("base_login", attribute="title"))
    # Output: Sign in to Acme

    # Example 5: Startup completeness check
    print("\n" + "=" * 50)
    print("Example 5: Completeness Check")
    print("=" * 50)

    print(english.validate_default_bundle_complete())
    # Output: []

    sys.path.remove(str(build_dir))
