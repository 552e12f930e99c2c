#!/usr/bin/env python
"""Seed a local Domainer setup from the bundled samples.

Copies ``config.sample.yaml`` to ``config.yaml`` and the sample option and
domain blobs into ``data/``, where the yaml storage backend reads them.

Usage:
    python config.py          # Seed missing files only
    python config.py --force  # Replace existing config and data files
"""

import argparse
import shutil
from pathlib import Path

# Sample -> target, relative to the repository root
SEED_FILES = {
    "config.sample.yaml": "config.yaml",
    "sample_data/domainer_options.yaml": "data/domainer_options.yaml",
    "sample_data/domainer_domains.yaml": "data/domainer_domains.yaml",
}


def seed(root: Path, force: bool = False) -> list[str]:
    """Copy samples into place. Returns the targets written."""
    written = []
    for sample, target in SEED_FILES.items():
        sample_path = root / sample
        target_path = root / target

        if not sample_path.exists():
            print(f"  missing sample: {sample}")
            continue

        if target_path.exists() and not force:
            print(f"  keep: {target} (use --force to replace)")
            continue

        target_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy(sample_path, target_path)
        written.append(target)
        print(f"  seeded: {target}")
    return written


def main():
    parser = argparse.ArgumentParser(description="Seed Domainer config and storage from samples")
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Replace existing config and data files",
    )
    args = parser.parse_args()

    written = seed(Path(__file__).parent.resolve(), force=args.force)
    print(f"Seeded {len(written)} file(s). Start the service with: python start.py")


if __name__ == "__main__":
    main()
