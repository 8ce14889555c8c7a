import argparse
import ast
import logging
import sys

# Internal imports
from .sorted_map import SortedMap, KeyNotFoundError
from .utils.profiler import profile
from .utils.error_strings import MALFORMED_PAIR_ARG


def _parse_value(raw: str):
    """
    Values are read as Python literals when possible (1, 2.5, None, [1, 2]), otherwise kept as strings.
    """
    try:
        return ast.literal_eval(raw)
    except (ValueError, SyntaxError):
        return raw


def parse_pair(arg: str) -> tuple[str, object]:
    key, sep, raw_value = arg.partition("=")
    if not sep or key == "":
        raise ValueError(MALFORMED_PAIR_ARG.format(arg=arg))
    return key, _parse_value(raw_value)


def build_map(pairs: list[str], deletes: list[str], merges: list[str]) -> SortedMap:
    """
    Ingest the pairs in order, then apply deletions, then merge the merge pairs (incoming value wins).
    """
    sorted_map = SortedMap(pairs, transform=parse_pair)
    logging.info(f"Built map with {len(sorted_map)} keys from {len(pairs)} pairs")

    for key in deletes:
        sorted_map = sorted_map.delete(key)

    if merges:
        sorted_map = sorted_map.merge(SortedMap(merges, transform=parse_pair))
        logging.info(f"Merged {len(merges)} pairs, map now has {len(sorted_map)} keys")

    return sorted_map


def run(args: argparse.Namespace) -> int:
    sorted_map = build_map(args.pairs, args.delete, args.merge)
    print(repr(sorted_map))
    return 0


def _parse_args(args):
    parser = argparse.ArgumentParser(description="Build an insertion-ordered map from key=value pairs and print it.")
    parser.add_argument(
        "pairs", nargs="*", default=[], help="key=value pairs, ingested in order"
    )
    parser.add_argument(
        "--delete", action="append", default=[], metavar="KEY", help="Key to delete after ingestion (repeatable)"
    )
    parser.add_argument(
        "--merge", action="append", default=[], metavar="PAIR", help="key=value pair to merge in last (repeatable)"
    )
    parser.add_argument(
        "--debug", action="store_true", default=False, help="Enable debug logging (default: False)"
    )
    parser.add_argument(
        "--profile", default=None, metavar="FILE", help="Profile the run and dump stats to FILE"
    )
    return parser.parse_args(args)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
        logging.debug("Debug logging enabled")
    else:
        logging.basicConfig(level=logging.INFO)

    runner = profile(run, output_file=args.profile) if args.profile else run

    try:
        return runner(args)
    except (KeyNotFoundError, ValueError) as e:
        logging.info(f"Failed to build map: {e}")
        print(e, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
