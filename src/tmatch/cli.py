"""
Command-line front end: match a template in a scene, draw the hits and
optionally emit a JSON report and a score heatmap.
"""

from __future__ import annotations

import argparse
import logging
import sys
from enum import IntEnum
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_CANDIDATE_MULTIPLIER, DEFAULT_SUPPRESSION_DIVISOR, MatchConfig, Region
from .errors import InvalidInputError
from .io.image_loader import MATCH_MODES, load_image, prepare_for_match, write_image
from .methods import MatchMethod
from .matching.engine import MatchResult, TemplateMatcher
from .render import DRAW_MODES, draw_matches, render_heatmap
from .report import build_report, write_report

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    OK = 0
    INPUT_NOT_FOUND = 1
    CANNOT_READ_INPUT = 2
    CANNOT_WRITE_OUTPUT = 3
    INVALID_PARAMS = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Locate distinct template matches in a scene image.")
    parser.add_argument("--in", dest="in_path", type=Path, required=True, help="Scene image path.")
    parser.add_argument("--templ", dest="templ_path", type=Path, required=True, help="Template image path.")
    parser.add_argument("--out", dest="out_path", type=Path, required=True, help="Annotated output image path.")
    parser.add_argument(
        "--method",
        type=str,
        choices=[method.value for method in MatchMethod],
        default=MatchMethod.CCOEFF_NORMED.value,
        help="Normalized OpenCV matching method.",
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=MATCH_MODES,
        default="gray",
        help="Match on grayscale or BGR pixels.",
    )
    parser.add_argument("--max-results", type=int, default=5, help="Maximum number of matches to report.")
    parser.add_argument("--min-score", type=float, default=0.80, help="Minimum confidence in [0, 1].")
    parser.add_argument("--nms", type=float, default=0.30, help="IoU threshold in [0, 1] for deduplication.")
    parser.add_argument("--roi", type=str, default=None, help="Restrict the search to x,y,w,h.")
    parser.add_argument(
        "--draw",
        type=str,
        choices=DRAW_MODES,
        default="bbox+label+score",
        help="Annotation style for the output image.",
    )
    parser.add_argument("--thickness", type=int, default=2, help="Rectangle line thickness (>= 1).")
    parser.add_argument("--font-scale", type=float, default=0.5, help="Label font scale (> 0).")
    parser.add_argument("--json-path", type=Path, default=None, help="Optional JSON report path.")
    parser.add_argument("--heatmap-path", type=Path, default=None, help="Optional score heatmap image path.")
    parser.add_argument(
        "--candidate-multiplier",
        type=int,
        default=DEFAULT_CANDIDATE_MULTIPLIER,
        help="Raw candidates extracted per requested result before NMS.",
    )
    parser.add_argument(
        "--suppression-divisor",
        type=int,
        default=DEFAULT_SUPPRESSION_DIVISOR,
        help="Suppression half-extent is template size divided by this value.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity.",
    )
    return parser


def run(args: argparse.Namespace) -> ExitCode:
    try:
        scene = load_image(args.in_path)
        template = load_image(args.templ_path)
    except FileNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return ExitCode.INPUT_NOT_FOUND
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return ExitCode.CANNOT_READ_INPUT

    try:
        config = MatchConfig(
            method=MatchMethod.parse(args.method),
            max_results=args.max_results,
            min_confidence=args.min_score,
            iou_threshold=args.nms,
            candidate_multiplier=args.candidate_multiplier,
            suppression_divisor=args.suppression_divisor,
            roi=Region.parse(args.roi) if args.roi else None,
        )
        scene_proc = prepare_for_match(scene, args.mode)
        templ_proc = prepare_for_match(template, args.mode)
        result = TemplateMatcher(config).match(scene_proc, templ_proc)
        annotated = draw_matches(
            scene,
            result.candidates,
            draw=args.draw,
            thickness=args.thickness,
            font_scale=args.font_scale,
        )
    except InvalidInputError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return ExitCode.INVALID_PARAMS

    try:
        if args.heatmap_path is not None:
            write_image(args.heatmap_path, render_heatmap(result.heatmap, config.method))
        if args.json_path is not None:
            report = build_report(
                config,
                result.candidates,
                scene_size=result.scene_size,
                template_size=result.template_size,
                input_path=str(args.in_path),
                template_path=str(args.templ_path),
                output_path=str(args.out_path),
                mode=args.mode,
                draw=args.draw,
                thickness=args.thickness,
                font_scale=args.font_scale,
            )
            write_report(args.json_path, report)
        write_image(args.out_path, annotated)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return ExitCode.CANNOT_WRITE_OUTPUT

    _print_summary(args, config, result)
    return ExitCode.OK


def _print_summary(args: argparse.Namespace, config: MatchConfig, result: MatchResult) -> None:
    template_w, template_h = result.template_size
    scene_w, scene_h = result.scene_size
    print("command: match")
    print(f"in: {args.in_path}")
    print(f"templ: {args.templ_path}")
    print(f"out: {args.out_path}")
    print(f"mode: {args.mode}")
    print(f"method: {config.method.value}")
    print(f"templ_size: {template_w}x{template_h}")
    print(f"scene_size: {scene_w}x{scene_h}")
    print(
        f"params: max_results={config.max_results} min_score={config.min_confidence:.2f} "
        f"nms={config.iou_threshold:.2f} draw={args.draw} thickness={args.thickness} "
        f"font_scale={args.font_scale:.2f} roi={args.roi or 'none'} "
        f"json={args.json_path or 'none'} heatmap={args.heatmap_path or 'none'}"
    )
    print("status: ok")
    print(f"found: {len(result.candidates)}")
    best = result.best
    if best is not None:
        print(
            f"best: conf={best.confidence:.2f} raw={best.raw_score:.4f} "
            f"at x={best.bbox.x} y={best.bbox.y}"
        )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    code = run(args)
    logger.debug("exiting with %s", code.name)
    return int(code)


if __name__ == "__main__":
    sys.exit(main())
