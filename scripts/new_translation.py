#!/usr/bin/env python3
"""
Scaffold a translation file for a new language.

Copies an existing translation file to <code>.json so the new language
builds straight away; translators then replace the values in place.

Usage:
    python scripts/new_translation.py de

    # Seed from another language, or a different translations directory:
    python scripts/new_translation.py de --from fr --dir src/translations
"""

import argparse
import json
from pathlib import Path


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Create a translation file for a new language"
    )
    parser.add_argument(
        "code",
        help="Language code of the new file, e.g. 'de' (becomes de.json)"
    )
    parser.add_argument(
        "--from",
        dest="source",
        default="en",
        help="Language code to copy keys and values from (default: en)"
    )
    parser.add_argument(
        "--dir", "-d",
        default="src/translations",
        help="Translations directory (default: src/translations)"
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite an existing translation file without prompting"
    )

    args = parser.parse_args(argv)

    translations_dir = Path(args.dir)
    source_path = translations_dir / f"{args.source}.json"
    if not source_path.exists():
        print(f"Error: {source_path} not found")
        return 1

    output_path = translations_dir / f"{args.code}.json"
    if output_path.exists() and not args.force:
        response = input(f"{output_path} already exists. Overwrite? [y/N] ")
        if response.lower() != 'y':
            print("Aborted.")
            return 0

    with open(source_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write('\n')

    print(f"Created {output_path} from {source_path.name} ({len(data)} top-level keys)")
    print("\nNext steps:")
    print(f"1. Translate the values in {output_path}")
    print("2. Run: python sitebuild.py")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
