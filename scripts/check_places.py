#!/usr/bin/env python3
"""
Quick validation of the place catalog used for shop-name resolution.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from data_loader import load_place_catalog  # noqa: E402
from reviewscore.fuzzy import CanonicalResolver  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate the place catalog and try shop queries.")
    parser.add_argument(
        "--places-file",
        default="",
        help="Path to a place catalog JSON (default: built-in catalog)",
    )
    parser.add_argument("queries", nargs="*", help="Shop queries to resolve against the catalog")
    args = parser.parse_args()

    places, aliases = load_place_catalog(args.places_file)
    print(f"Loaded {len(places)} places and {len(aliases)} aliases from {args.places_file or 'built-in catalog'}")
    for place in places:
        print(f" - {place.name}" + (f" ({place.area})" if place.area else ""))

    seen = set()
    duplicates = []
    for place in places:
        key = place.name.lower()
        if key in seen:
            duplicates.append(place.name)
        seen.add(key)
    if duplicates:
        print(f"\nDuplicate place names: {', '.join(duplicates)}")

    resolver = CanonicalResolver(places, aliases)
    if args.queries:
        print("\nResolution:")
    for query in args.queries:
        place = resolver.resolve(query)
        print(f" - {query!r} -> {place.name if place else '(scanned verbatim)'}")
    return 1 if duplicates else 0


if __name__ == "__main__":
    raise SystemExit(main())
