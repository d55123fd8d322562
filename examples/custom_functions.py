"""Custom Functions Example - extending the template function registry.

Templates call functions by their upper-case name. The holder renders with
the shared NUMBER/DATETIME registry unless given its own; copy() the shared
registry to add functions without affecting other holders.

This example registers:

1. FILESIZE: human-readable byte counts
2. GREETING: a locale-aware function (inject_locale=True)

WARNING: Examples use use_isolating=False for cleaner terminal output.

Python 3.13+.
"""

from __future__ import annotations

from ftlbind import LocalizationHolder
from ftlbind.localization import build_language_bundle
from ftlbind.runtime import get_shared_registry


def FILESIZE(size: int) -> str:  # noqa: N802
    """Format a byte count with a binary unit."""
    value = float(size)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if value < 1024 or unit == "GiB":
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GiB"


def greeting(name: str, locale_code: str) -> str:
    """Pick a salutation by language."""
    if locale_code.startswith("lv"):
        return f"Sveiki, {name}"
    return f"Hello, {name}"


functions = get_shared_registry().copy()
functions.register(FILESIZE)
functions.register(greeting, inject_locale=True)

holder = LocalizationHolder(
    {
        "en_US": build_language_bundle(
            "en_US",
            {
                "files": (
                    "size = Download size: { FILESIZE($bytes) }\n"
                    "welcome = { GREETING($user) }!\n"
                )
            },
        ),
        "lv_LV": build_language_bundle(
            "lv_LV", {"files": "size = Lejupielāde: { FILESIZE($bytes) }"}
        ),
    },
    "en_US",
    functions=functions,
)

print(holder.format("en_US", "files_size", {"bytes": 3_500_000}))
# Output: Download size: 3.3 MiB
print(holder.format("lv_LV", "files_size", {"bytes": 512}))
# Output: Lejupielāde: 512 B
print(holder.format("lv_LV", "files_welcome", {"user": "Anna"}))
# Output: Hello, Anna! (rendered with the en_US template, which sees the en_US locale)
