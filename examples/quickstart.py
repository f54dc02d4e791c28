"""Quickstart example for langreload.

This example demonstrates loading a directory of language files, looking up
messages with fallback, and reacting to live edits.

Note: Examples use short stability timings so edits are picked up quickly.
The defaults (0.5s quiet period) are better suited to real editors.
"""

import logging
import tempfile
import threading
import time
from pathlib import Path

from langreload import LanguageEvent, LanguageLoader

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

with tempfile.TemporaryDirectory() as tmp:
    locales = Path(tmp)
    (locales / "en_UK.yml").write_text(
        "welcome:\n  message: Welcome!\n  farewell: Goodbye\n", encoding="utf-8"
    )
    (locales / "de_DE.json").write_text(
        '{"welcome": {"message": "Willkommen!"}}', encoding="utf-8"
    )

    # Example 1: Load and look up
    print("=" * 50)
    print("Example 1: Load and Look Up")
    print("=" * 50)

    loader = LanguageLoader(
        locales,
        "en_UK",
        stability_threshold=0.1,
        poll_interval=0.05,
        force_polling=True,
    )
    print(loader.get_load_summary())
    print(loader.resolve_message("de_DE", "welcome.message"))
    # Output: Willkommen!

    # Example 2: Fallback and missing messages
    print("\n" + "=" * 50)
    print("Example 2: Fallback")
    print("=" * 50)

    print(loader.resolve_message("fr_FR", "welcome.message"))
    # Output: Welcome! (fr_FR is not loaded, en_UK is the fallback)
    print(loader.resolve_message("de_DE", "welcome.farewell"))
    # Output: Message key "welcome.farewell" not found in language "de_DE".

    # Example 3: Live reload
    print("\n" + "=" * 50)
    print("Example 3: Live Reload")
    print("=" * 50)

    updated = threading.Event()

    def on_change(event: LanguageEvent) -> None:
        print(f"{event.kind}: {event.code}")
        updated.set()

    loader.subscribe(on_change)
    time.sleep(0.2)
    (locales / "de_DE.json").write_text(
        '{"welcome": {"message": "Herzlich willkommen!"}}', encoding="utf-8"
    )
    updated.wait(5)
    print(loader.resolve_message("de_DE", "welcome.message"))
    # Output: Herzlich willkommen!

    loader.stop()
