import argparse
import os
import sys

from tmxcore.errors import TmxError
from tmxcore.tmx import Tmx


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TMX translation memory tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    merge_parser = subparsers.add_parser("merge", help="Merge several TMX files into one")
    merge_parser.add_argument("output", help="Path of the merged .tmx file")
    merge_parser.add_argument("inputs", nargs="+", help="TMX files to merge, in order")

    diff_parser = subparsers.add_parser("diff", help="Write what NEW adds to OLD")
    diff_parser.add_argument("output", help="Path of the diff .tmx file")
    diff_parser.add_argument("old", help="Baseline TMX file")
    diff_parser.add_argument("new", help="TMX file with additions")

    stats_parser = subparsers.add_parser("stats", help="Show unit counts and locales")
    stats_parser.add_argument("inputs", nargs="+", help="TMX files to inspect")

    parser.add_argument("--source-lang", default="en-US", help="Source locale assumed when a file has none")
    return parser


def _load_all(paths, source_lang):
    for path in paths:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Error: File not found: {path}")
    return [Tmx.load(path, source_locale=source_lang) for path in paths]


def run(args) -> int:
    if args.command == "stats":
        for path, tmx in zip(args.inputs, _load_all(args.inputs, args.source_lang)):
            locales = []
            for unit in tmx.get_translation_units():
                for variant in unit.variants:
                    if variant.locale not in locales:
                        locales.append(variant.locale)
            print(f"{path}: {tmx.size()} translation units, locales: {', '.join(locales) or '-'}")
        return 0

    if args.command == "merge":
        documents = _load_all(args.inputs, args.source_lang)
        print(f"Merging {len(documents)} files...")
        result = documents[0].merge(documents[1:])
    else:
        old, new = _load_all([args.old, args.new], args.source_lang)
        print(f"Comparing {args.old} with {args.new}...")
        result = old.diff(new)

    result.set_path(args.output)
    result.write()
    print(f"Wrote {result.size()} translation units to {args.output}")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except FileNotFoundError as e:
        print(e)
        return 1
    except TmxError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
