#!/usr/bin/env python3
import sys
import logging
import argparse

from slicer.batch import OUTPUT_FORMATS, run_batch
from slicer.config import STATE_FILE
from slicer.errors import NoOutputDirectory
from slicer.output_dir import load_last_output_dir, resolve_output_dir, store_last_output_dir

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Slice images into full-bleed A4 pages and save one PDF per image"
    )
    parser.add_argument("images", nargs="+", help="Image files to convert")
    parser.add_argument(
        "-o", "--output-dir",
        default="",
        help="Directory for the generated files. Defaults to the last directory used."
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="pdf",
        help="pdf: one document per image; png: one image file per page"
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        output_dir = resolve_output_dir(args.output_dir or load_last_output_dir(STATE_FILE))
    except NoOutputDirectory as e:
        logger.error(f"{e}. Pass --output-dir.")
        return 2
    store_last_output_dir(output_dir, STATE_FILE)

    result = run_batch([(path, path) for path in args.images], output_dir, output_format=args.format)

    summary = result.summary()
    print(f"✅ Converted {summary['succeeded']} of {len(result.items)} images into {output_dir}")
    for item in result.failed:
        print(f"❌ {item.name}: {item.error.value}")
    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(main())
