import argparse
import sys
from pathlib import Path

import yaml

from . import parse, validate


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="practices-lint",
        description="Validate a best-practices topic catalog",
    )
    parser.add_argument("catalog", help="Path to the catalog YAML file")
    parser.add_argument(
        "--storage-root",
        default=None,
        help="Directory holding the topic documents; enables existence checks",
    )
    args = parser.parse_args()

    path = Path(args.catalog)
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        sys.exit(1)

    try:
        catalog = parse(path)
    except (KeyError, ValueError, TypeError, yaml.YAMLError) as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)

    result = validate(catalog, args.storage_root)

    if result.warnings:
        for w in result.warnings:
            print(f"  ⚠ {w}", file=sys.stderr)

    if not result.is_valid:
        print(f"Validation failed: {len(result.errors)} error(s):")
        for err in result.errors:
            print(f"  • {err}")
        sys.exit(1)

    version_str = f" v{catalog.version}" if catalog.version else ""
    print(
        f"✓ {path} is valid"
        f", catalog '{catalog.name}'{version_str}"
        f", {len(catalog)} topic(s)"
    )


if __name__ == "__main__":
    main()
