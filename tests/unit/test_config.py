from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

import tmatch
from tmatch.config import MatchConfig, Region
from tmatch.errors import InvalidInputError
from tmatch.matching.confidence import MatchMethod


def test_region_parse_accepts_comma_separated_integers() -> None:
    region = Region.parse("20, 15,40,30")
    assert region == Region(20, 15, 40, 30)
    assert region.origin == (20, 15)
    assert region.as_dict() == {"x": 20, "y": 15, "w": 40, "h": 30}
    assert region.contains_within(60, 45)
    assert not region.contains_within(59, 45)


@pytest.mark.parametrize("text", ["1,2,3", "a,b,c,d", "0,0,0,5", "-1,0,5,5", "1,2,3,4,5"])
def test_region_parse_rejects_malformed_input(text: str) -> None:
    with pytest.raises(InvalidInputError):
        Region.parse(text)


def test_match_config_defaults() -> None:
    config = MatchConfig()
    assert config.method is MatchMethod.CCOEFF_NORMED
    assert config.max_results == 5
    assert config.min_confidence == pytest.approx(0.8)
    assert config.iou_threshold == pytest.approx(0.3)
    assert config.candidate_pool == 50
    assert config.suppression_divisor == 4
    assert config.roi is None


def test_match_config_coerces_method_and_roi_strings() -> None:
    config = MatchConfig(method="sqdiff_normed", roi="1,2,30,40", max_results=3, candidate_multiplier=4)
    assert config.method is MatchMethod.SQDIFF_NORMED
    assert config.roi == Region(1, 2, 30, 40)
    assert config.candidate_pool == 12


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_results": 0},
        {"min_confidence": 1.01},
        {"iou_threshold": -0.5},
        {"candidate_multiplier": 0},
        {"suppression_divisor": 0},
        {"method": "tm_ccoeff"},
    ],
)
def test_match_config_rejects_invalid_values(kwargs: dict) -> None:
    with pytest.raises(InvalidInputError):
        MatchConfig(**kwargs)


def test_package_modules_import_cleanly_in_a_fresh_interpreter() -> None:
    code = "import tmatch.config, tmatch.methods; import tmatch.matching.engine"
    src_root = Path(tmatch.__file__).resolve().parents[1]
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(filter(None, [str(src_root), os.environ.get("PYTHONPATH")]))}
    completed = subprocess.run([sys.executable, "-c", code], capture_output=True, text=True, env=env)
    assert completed.returncode == 0, completed.stderr
