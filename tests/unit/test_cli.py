from __future__ import annotations

import json
from pathlib import Path

import cv2
import numpy as np

from tmatch.cli import ExitCode, main


def _write_inputs(root: Path) -> tuple[Path, Path]:
    rng = np.random.default_rng(5)
    scene = rng.integers(0, 256, size=(90, 120), dtype=np.uint8)
    template = rng.integers(0, 256, size=(14, 14), dtype=np.uint8)
    scene[10:24, 15:29] = template
    scene[60:74, 90:104] = template
    scene_path = root / "scene.png"
    template_path = root / "templ.png"
    cv2.imwrite(str(scene_path), scene)
    cv2.imwrite(str(template_path), template)
    return scene_path, template_path


def test_cli_writes_annotated_image_report_and_heatmap(tmp_path: Path, capsys) -> None:
    scene_path, template_path = _write_inputs(tmp_path)
    (tmp_path / "out").mkdir()
    out_path = tmp_path / "out" / "annotated.png"
    json_path = tmp_path / "out" / "report.json"
    heatmap_path = tmp_path / "out" / "heat.png"

    code = main(
        [
            "--in", str(scene_path),
            "--templ", str(template_path),
            "--out", str(out_path),
            "--json-path", str(json_path),
            "--heatmap-path", str(heatmap_path),
            "--roi", "0,0,110,85",
        ]
    )

    assert code == ExitCode.OK
    assert out_path.exists()
    heat = cv2.imread(str(heatmap_path))
    assert heat.shape[:2] == (85 - 14 + 1, 110 - 14 + 1)
    report = json.loads(json_path.read_text(encoding="utf-8"))
    assert report["stats"]["found"] == 2
    assert {(m["bbox"]["x"], m["bbox"]["y"]) for m in report["matches"]} == {(15, 10), (90, 60)}
    stdout = capsys.readouterr().out
    assert "found: 2" in stdout
    assert f"json={json_path} heatmap={heatmap_path}" in stdout
    assert "thickness=2 font_scale=0.50" in stdout


def test_cli_reports_missing_input(tmp_path: Path) -> None:
    _, template_path = _write_inputs(tmp_path)

    code = main(["--in", str(tmp_path / "missing.png"), "--templ", str(template_path), "--out", str(tmp_path / "o.png")])

    assert code == ExitCode.INPUT_NOT_FOUND


def test_cli_rejects_out_of_range_threshold(tmp_path: Path, capsys) -> None:
    scene_path, template_path = _write_inputs(tmp_path)

    code = main(
        ["--in", str(scene_path), "--templ", str(template_path), "--out", str(tmp_path / "o.png"), "--nms", "1.5"]
    )

    assert code == ExitCode.INVALID_PARAMS
    assert "error:" in capsys.readouterr().err
    assert not (tmp_path / "o.png").exists()


def test_cli_rejects_sixteen_bit_images(tmp_path: Path, capsys) -> None:
    scene = np.random.default_rng(9).integers(0, 65536, size=(60, 60), dtype=np.uint16)
    scene_path = tmp_path / "scene16.png"
    template_path = tmp_path / "templ16.png"
    cv2.imwrite(str(scene_path), scene)
    cv2.imwrite(str(template_path), scene[10:22, 20:32])

    code = main(["--in", str(scene_path), "--templ", str(template_path), "--out", str(tmp_path / "o.png")])

    assert code == ExitCode.INVALID_PARAMS
    assert "uint16" in capsys.readouterr().err
    assert not (tmp_path / "o.png").exists()


def test_cli_missing_output_directory_is_a_write_failure(tmp_path: Path, capsys) -> None:
    scene_path, template_path = _write_inputs(tmp_path)

    code = main(
        [
            "--in", str(scene_path),
            "--templ", str(template_path),
            "--out", str(tmp_path / "absent" / "o.png"),
            "--json-path", str(tmp_path / "report.json"),
        ]
    )

    captured = capsys.readouterr()
    assert code == ExitCode.CANNOT_WRITE_OUTPUT
    assert "status: ok" not in captured.out
    assert "error:" in captured.err
    assert not (tmp_path / "absent").exists()


def test_cli_does_not_report_success_when_heatmap_write_fails(tmp_path: Path, capsys) -> None:
    scene_path, template_path = _write_inputs(tmp_path)

    code = main(
        [
            "--in", str(scene_path),
            "--templ", str(template_path),
            "--out", str(tmp_path / "o.png"),
            "--heatmap-path", str(tmp_path / "absent" / "heat.png"),
        ]
    )

    assert code == ExitCode.CANNOT_WRITE_OUTPUT
    assert "status: ok" not in capsys.readouterr().out
    assert not (tmp_path / "o.png").exists()
