import argparse
import logging
import sys
from typing import Optional, Sequence

from panelnet import (
    MeshOptions,
    NetworkInputError,
    dump_result,
    load_network,
    run_network,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _render_plot(result, path: str, title: str) -> None:
    from panelnet.render import render_network_plot

    render_network_plot(result, path, title=title)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Offset, group and mesh a line network")
    parser.add_argument("path", help="Path to the JSON network document")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--n-u", type=int, help="Override subdivisions across panels")
    parser.add_argument("--n-v", type=int, help="Override subdivisions along panel sides")
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Threads used for the per-line and per-panel stages (default: 1)",
    )
    parser.add_argument("--output-path", help="Write the full result as JSON to this path")
    parser.add_argument("--plot-output-path", help="Write a PNG top view to this path")
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    logger.info("Loading network from %s", args.path)
    try:
        document = load_network(args.path)
    except NetworkInputError as exc:
        logger.error("Invalid network document: %s", exc)
        raise SystemExit(1)

    options = document.options
    if args.n_u is not None or args.n_v is not None:
        options = MeshOptions(
            n_u=args.n_u if args.n_u is not None else options.n_u,
            n_v=args.n_v if args.n_v is not None else options.n_v,
            angle=options.angle,
            deviation=options.deviation,
            vertical=options.vertical,
            free_end_profile=options.free_end_profile,
        )

    try:
        result = run_network(
            document.lines,
            document.tolerance,
            document.width_begin,
            document.width_end,
            options,
            workers=args.workers,
        )
    except NetworkInputError as exc:
        logger.error("Network rejected: %s", exc)
        raise SystemExit(1)

    summary = result.summary()
    print("Summary:")
    for key, value in summary.items():
        print(f"  {key}: {value}")

    print("Groups:")
    for group_id, lines in enumerate(result.group_lines):
        print(f"  [{group_id}] panels={result.groups[group_id]} lines={lines}")

    print("Vertices:")
    for vid, point in enumerate(result.points):
        degree = len(result.vertex_vertex[vid])
        print(f"  {vid}: ({point[0]:.6f}, {point[1]:.6f}, {point[2]:.6f}) degree={degree}")

    if args.output_path:
        written = dump_result(result, args.output_path)
        logger.info("Wrote result JSON to %s", written)
        print(f"Result written to {written}")

    if args.plot_output_path:
        _render_plot(result, args.plot_output_path, title=args.path)
        print(f"Plot written to {args.plot_output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
