from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
TOOL = ROOT / "tools" / "run_laser_calc.py"


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, str(TOOL), *args],
        capture_output=True,
        text=True,
        check=False,
        cwd=str(ROOT),
    )


def test_single_record_from_flags() -> None:
    result = _run(
        "--wavelength-nm",
        "532",
        "--power-w",
        "0.005",
        "--exposure-time-s",
        "0.25",
    )
    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["version"] == "1.0"
    assert payload["results"][0]["laser_class"] == "Class 3R"


def test_records_file_to_output(tmp_path: Path) -> None:
    records = {
        "records": [
            {"wavelength_nm": 532, "emission_type": "CW", "power_W": 1e-4, "exposure_time_s": 100},
            {
                "wavelength_nm": 1064,
                "emission_type": "Pulsed",
                "pulse_energy_J": 0.1,
                "pulse_width_s": 1e-8,
                "repetition_rate_Hz": 1000,
                "beam_diameter_mm": 5,
                "exposure_time_s": 10,
            },
        ]
    }
    in_path = tmp_path / "lasers.json"
    in_path.write_text(json.dumps(records), encoding="utf-8")
    out_path = tmp_path / "out" / "classes.json"

    result = _run("--input", str(in_path), "--out", str(out_path), "--mode", "CORRECTED")
    assert result.returncode == 0, result.stderr

    data = json.loads(out_path.read_text(encoding="utf-8"))
    classes = [item["laser_class"] for item in data["results"]]
    assert classes[0] == "Class 1"
    assert classes[1] == "Class 4"


def test_invalid_record_exits_with_2(tmp_path: Path) -> None:
    in_path = tmp_path / "bad.json"
    in_path.write_text(json.dumps([{"wavelength_nm": 50, "power_W": 1, "exposure_time_s": 1}]), encoding="utf-8")

    result = _run("--input", str(in_path))
    assert result.returncode == 2
    assert "wavelength_nm" in result.stderr


def test_missing_source_exits_with_2() -> None:
    result = _run("--power-w", "0.001")
    assert result.returncode == 2


def test_auto_time_base_flag_and_echoed_input() -> None:
    result = _run("--wavelength-nm", "532", "--power-w", "0.0005", "--auto-time-base")
    assert result.returncode == 0, result.stderr
    item = json.loads(result.stdout)["results"][0]
    assert item["laser_class"] == "Class 2"
    assert item["input"]["auto_time_base"] is True
    assert item["input"]["exposure_time_s"] == 100.0
    assert item["input"]["power_W"] == 0.0005
