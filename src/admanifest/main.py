"""Subcommand dispatcher for admanifest.

Usage:
    admanifest transform  --job job.yaml --output-dir out/
    admanifest timeline   --manifest manifest.js
    admanifest palette    --color "#4F46E5"
"""

import argparse
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="admanifest",
        description="Ad manifest transformation: copy, brand colors, fonts, layout, timelines.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to its own module's main().
    subparsers.add_parser("transform", help="Apply a YAML job to a template's sizes")
    subparsers.add_parser("timeline", help="Print a manifest's derived animation timeline")
    subparsers.add_parser("palette", help="Generate color ramps, CSS, and swatches")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    if parsed.command == "transform":
        from .cli import main as transform_main
        transform_main(remaining)
    elif parsed.command == "timeline":
        from .timeline_cli import main as timeline_main
        timeline_main(remaining)
    elif parsed.command == "palette":
        from .palette_cli import main as palette_main
        palette_main(remaining)


if __name__ == "__main__":
    main()
