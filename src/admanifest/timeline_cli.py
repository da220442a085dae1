"""CLI for inspecting a manifest's animation timeline.

Usage:
    admanifest timeline --manifest manifest.js
    admanifest timeline --manifest manifest.js --json
    admanifest timeline --manifest manifest.js --layers
"""

import argparse
import json

from .layers import layer_summary_text
from .manifest import load_manifest
from .timeline import timeline_summary


def format_timeline(summary: dict) -> str:
    """Human-readable table of timeline entries."""
    lines = [f"Duration: {summary['duration']:.2f}s"]
    if not summary["layers"]:
        lines.append("  (no animated layers)")
    for entry in summary["layers"]:
        props = ", ".join(f"{k}={v}" for k, v in entry["properties"].items())
        lines.append(
            f"  {entry['delay']:6.2f}s — {entry['endTime']:6.2f}s  "
            f"{entry['name']} [{entry['animationType']}] {props}"
        )
    return "\n".join(lines)


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Print the derived animation timeline of a manifest.js.",
    )
    parser.add_argument(
        "--manifest", required=True,
        help="Path to manifest.js",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the timeline as JSON",
    )
    parser.add_argument(
        "--layers", action="store_true",
        help="Also list layers with their first-scene position and size",
    )
    parsed = parser.parse_args(args)

    manifest = load_manifest(parsed.manifest)
    summary = timeline_summary(manifest)

    if parsed.json:
        print(json.dumps(summary, indent=2))
    else:
        print(format_timeline(summary))

    if parsed.layers:
        print()
        print(layer_summary_text(manifest))


if __name__ == "__main__":
    main()
