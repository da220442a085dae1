"""CLI for ad transformation.

Reads a YAML job, loads each size's manifest.js and index.html from the
template directory, transforms them, and writes one folder per size.

Usage:
    # Transform every size found in the template directory
    admanifest transform --job job.yaml --output-dir out/

    # Transform a single size
    admanifest transform --job job.yaml --output-dir out/ --size 300x250

    # Parallel (4 workers)
    admanifest transform --job job.yaml --output-dir out/ --workers 4

    # Validate only (job + template files, nothing written)
    admanifest transform --job job.yaml --validate
"""

import argparse
import json
import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

from .job import load_job
from .pipeline import transform_size


MANIFEST_FILE = "manifest.js"
HTML_FILE = "index.html"
TIMELINE_FILE = "timeline.json"


# ── Template discovery ────────────────────────────────────────────


def discover_sizes(template_dir: str | Path) -> list[str]:
    """Size folders under a template that contain manifest.js and index.html."""
    root = Path(template_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Template directory not found: {root}")
    return sorted(
        entry.name
        for entry in root.iterdir()
        if entry.is_dir()
        and not entry.name.startswith(".")
        and (entry / MANIFEST_FILE).exists()
        and (entry / HTML_FILE).exists()
    )


def validate_template_files(template_dir: str | Path, sizes: list[str]) -> None:
    """Check that every requested size has its manifest.js and index.html.

    Raises:
        FileNotFoundError: Lists all missing files.
    """
    root = Path(template_dir)
    missing = []
    for size in sizes:
        for name in (MANIFEST_FILE, HTML_FILE):
            p = root / size / name
            if not p.exists():
                missing.append(str(p))

    if missing:
        msg = f"Missing {len(missing)} template file(s):\n"
        for p in missing:
            msg += f"  - {p}\n"
        raise FileNotFoundError(msg)


# ── Per-size work ─────────────────────────────────────────────────


def _transform_and_write_one(args):
    """Worker: transform one size and write its output folder.

    Takes a single tuple so it works with ProcessPoolExecutor.
    """
    size, job, output_dir = args
    size_dir = Path(job["template"]["dir"]) / size

    print(f"  START  {size}", flush=True)
    t0 = time.monotonic()

    manifest_text = (size_dir / MANIFEST_FILE).read_text(encoding="utf-8")
    html = (size_dir / HTML_FILE).read_text(encoding="utf-8")
    result = transform_size(manifest_text, html, job, size)

    out_dir = Path(output_dir) / size
    out_dir.mkdir(parents=True, exist_ok=True)
    (out_dir / MANIFEST_FILE).write_text(result["manifest_js"], encoding="utf-8")
    (out_dir / HTML_FILE).write_text(result["html"], encoding="utf-8")
    (out_dir / TIMELINE_FILE).write_text(
        json.dumps(result["timeline"], indent=2), encoding="utf-8",
    )

    elapsed = time.monotonic() - t0
    animated = len(result["timeline"]["layers"])
    print(
        f"  DONE   {size} — {animated} animated layers, "
        f"{len(result['warnings'])} warnings, {elapsed:.2f}s",
        flush=True,
    )
    return size, result["warnings"]


# ── Main transformation ───────────────────────────────────────────


def transform(
    job_path: str,
    output_dir: str,
    size: str | None = None,
    workers: int = 1,
) -> dict[str, list[str]]:
    """Load a job, transform the requested sizes, write outputs.

    Args:
        job_path: Path to the YAML job.
        output_dir: Directory that receives one folder per size.
        size: If set, transform only this size.
        workers: Parallel worker processes. 1 = sequential.

    Returns:
        {size: [warning, ...]} for every transformed size.
    """
    job = load_job(job_path)
    template_dir = job["template"]["dir"]

    if size is not None:
        sizes = [size]
    else:
        sizes = job["sizes"] or discover_sizes(template_dir)
    validate_template_files(template_dir, sizes)

    if not sizes:
        print("No sizes to transform.")
        return {}

    work = [(s, job, output_dir) for s in sizes]
    effective_workers = min(workers, len(sizes))
    results = {}

    t_start = time.monotonic()
    if effective_workers <= 1:
        print(f"Transforming {len(sizes)} sizes to {output_dir}/\n")
        for item in work:
            done_size, warnings = _transform_and_write_one(item)
            results[done_size] = warnings
    else:
        print(
            f"Transforming {len(sizes)} sizes to {output_dir}/ "
            f"({effective_workers} workers)\n"
        )
        with ProcessPoolExecutor(max_workers=effective_workers) as pool:
            futures = [pool.submit(_transform_and_write_one, item) for item in work]
            for future in as_completed(futures):
                done_size, warnings = future.result()  # propagate exceptions
                results[done_size] = warnings

    total_wall = time.monotonic() - t_start
    print(f"\nDone: {len(sizes)} sizes written to {output_dir}/ ({total_wall:.1f}s total)")
    return results


# ── CLI entry point ───────────────────────────────────────────────


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Apply a YAML job to an ad template's manifests and HTML.",
    )
    parser.add_argument(
        "--job", required=True,
        help="Path to YAML job file",
    )
    parser.add_argument(
        "--output-dir",
        help="Directory for transformed sizes (one folder per size)",
    )
    parser.add_argument(
        "--size", default=None,
        help="Transform only this size, e.g. 300x250",
    )
    parser.add_argument(
        "--workers", type=int, default=1,
        help="Number of parallel workers (default: 1)",
    )
    parser.add_argument(
        "--validate", action="store_true",
        help="Validate job and template files only — write nothing",
    )
    args = parser.parse_args(args)

    logging.basicConfig(level=logging.WARNING, format="  WARN   %(message)s")

    if args.validate:
        job = load_job(args.job)
        template_dir = job["template"]["dir"]
        sizes = [args.size] if args.size else job["sizes"] or discover_sizes(template_dir)
        validate_template_files(template_dir, sizes)
        print(f"Job valid: {len(sizes)} sizes")
        for s in sizes:
            print(f"  {s}")
        print(f"Layer edits: {len(job['layer_edits'])}")
        print("All template files verified.")
        return

    if not args.output_dir:
        parser.error("--output-dir is required (unless using --validate)")

    transform(
        args.job, args.output_dir,
        size=args.size,
        workers=args.workers,
    )


if __name__ == "__main__":
    main()
