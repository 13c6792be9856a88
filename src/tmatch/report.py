"""
JSON report describing a match run.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple, Union

from .config import MatchConfig
from .matching.candidates import Candidate


def build_report(
    config: MatchConfig,
    candidates: Sequence[Candidate],
    scene_size: Tuple[int, int],
    template_size: Tuple[int, int],
    input_path: str = "",
    template_path: str = "",
    output_path: str = "",
    mode: str = "gray",
    draw: str = "bbox+label+score",
    thickness: int = 2,
    font_scale: float = 0.5,
) -> Dict[str, Any]:
    """
    Assemble the report in a stable key order.
    """
    params: Dict[str, Any] = {
        "mode": mode,
        "method": config.method.value,
        "max_results": config.max_results,
        "min_score": config.min_confidence,
        "nms": config.iou_threshold,
        "draw": draw,
        "thickness": thickness,
        "font_scale": font_scale,
        "roi": config.roi.as_dict() if config.roi is not None else {},
    }
    return {
        "command": "match",
        "input": input_path,
        "template": template_path,
        "output": output_path,
        "params": params,
        "template_size": {"w": template_size[0], "h": template_size[1]},
        "scene_size": {"w": scene_size[0], "h": scene_size[1]},
        "matches": [
            {
                "id": index,
                "bbox": candidate.bbox.as_dict(),
                "raw_score": candidate.raw_score,
                "confidence": candidate.confidence,
            }
            for index, candidate in enumerate(candidates)
        ],
        "stats": {"found": len(candidates)},
    }


def write_report(path: Union[str, Path], report: Dict[str, Any]) -> Path:
    output = Path(path)
    with output.open("w", encoding="utf-8") as handle:
        json.dump(report, handle, indent=4)
        handle.write("\n")
    return output


__all__ = ["build_report", "write_report"]
