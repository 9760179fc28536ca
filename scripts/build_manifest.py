"""Compile the portfolio folder into data/manifest.json for the manifest source mode.

Run with:
  python scripts/build_manifest.py                      # ./portfolio -> data/manifest.json
  python scripts/build_manifest.py --portfolio path/to/portfolio --out dist/manifest.json --csv catalogue.csv

Each subfolder becomes a category (sorted by name) and each eligible image in
it an artwork (sorted by filename), using the same naming rules as the
listing source so both modes show identical titles.
"""
from __future__ import annotations
import argparse
import os
import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from domain.models import Category
from services import persistence
from services.catalogue import catalogue_frame
from services.content_source import artworks_from_filenames
from utils.listing_parser import is_image_filename
from utils.naming import display_name_for

ROOT = Path(__file__).resolve().parent.parent


def scan_portfolio(portfolio_dir: Path):
    categories = []
    for folder in sorted(p for p in portfolio_dir.iterdir() if p.is_dir() and not p.name.startswith('.')):
        filenames = sorted(f.name for f in folder.iterdir() if f.is_file() and is_image_filename(f.name))
        categories.append(Category(
            name=folder.name,
            display_name=display_name_for(folder.name),
            artworks=artworks_from_filenames(folder.name, filenames),
        ))
    return categories


def main(argv=None):
    parser = argparse.ArgumentParser(description="Build the static portfolio manifest")
    parser.add_argument('--portfolio', type=Path, default=ROOT / 'portfolio')
    parser.add_argument('--out', type=Path, default=ROOT / 'data' / 'manifest.json')
    parser.add_argument('--csv', type=Path, help="also write a flat catalogue CSV")
    args = parser.parse_args(argv)

    if not args.portfolio.is_dir():
        raise SystemExit(f"[manifest] portfolio folder not found: {args.portfolio}")

    categories = scan_portfolio(args.portfolio)
    target = persistence.write_manifest(categories, str(args.out))
    total = sum(len(c.artworks) for c in categories)
    print(f"[manifest] {len(categories)} categories, {total} artworks -> {target}")

    if args.csv:
        catalogue_frame(categories).to_csv(args.csv, index=False)
        print(f"[manifest] catalogue -> {args.csv}")


if __name__ == "__main__":
    main()
