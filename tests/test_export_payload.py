from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from laser_core.classifier import classify
from laser_core.export_payload import (
    PAYLOAD_VERSION,
    build_payload,
    classification_payload,
    eyewear_payload,
    mpe_payload,
    multi_wavelength_payload,
    nohd_payload,
)
from laser_core.eyewear import compute_eyewear_od
from laser_core.models import ExposureContext, LaserSpec
from laser_core.mpe import compute_mpe
from laser_core.multi_wavelength import classify_multi
from laser_core.nohd import compute_nohd


def test_classification_payload_shape() -> None:
    res = classify(LaserSpec.cw(532, 5e-3), ExposureContext(0.25))
    payload = classification_payload(res)

    assert payload["laser_class"] == "Class 3R"
    assert payload["ael"] == {"value": 5e-3, "unit": "W"}
    assert payload["measured_emission"] == {"value": 5e-3, "unit": "W"}
    assert payload["condition1_test"] is True
    assert payload["measurement_conditions"]["condition1"] == {"aperture_mm": 50.0, "distance_mm": 2000.0}
    assert payload["measurement_conditions"]["is_condition1_applicable"] is True
    assert payload["steps"] == res.steps
    assert payload["safety_requirements"][0] == "Warning label required"


def test_infinite_nohd_is_serialised_as_string() -> None:
    payload = nohd_payload(compute_nohd(1.0, 7.0, 0.0, 532, 0.25))
    assert payload["nohd_m"] == "inf"
    assert payload["beam_diameter_at_nohd_mm"] == "inf"
    assert payload["hazard_class"] == "Extremely high hazard"
    json.dumps(payload)


def test_cw_mpe_payload_has_no_rule_values() -> None:
    payload = mpe_payload(compute_mpe(532, 100))
    assert payload["critical_mpe"]["unit"] == "W/cm²"
    assert payload["mpe_single_pulse"] is None
    assert payload["pulse_count"] is None
    assert payload["correction_factors"] == {"CA": 1.0, "CB": 1.0, "CC": 1.0}


def test_eyewear_and_multi_payloads() -> None:
    eyewear = eyewear_payload(compute_eyewear_od(LaserSpec.cw(532, 1.0), ExposureContext(0.25)))
    assert eyewear["en207_marking"] == "532 D LB4"

    multi = multi_wavelength_payload(
        classify_multi([LaserSpec.cw(532, 3e-4), LaserSpec.cw(635, 3e-4)], ExposureContext(100))
    )
    assert multi["method"] == "additive"
    assert multi["additive_group"] == "Visible Thermal (400-700 nm)"
    assert multi["laser_class"] == "Class 2"


def test_build_payload_envelope() -> None:
    res = classify(LaserSpec.cw(532, 5e-3), ExposureContext(0.25))
    payload = build_payload([classification_payload(res)])

    assert payload["version"] == PAYLOAD_VERSION
    assert "generated_at" in payload
    assert payload["generated_at"].endswith("+00:00")
    assert len(payload["results"]) == 1
    text = json.dumps(payload, ensure_ascii=False)
    assert json.loads(text)["results"][0]["laser_class"] == "Class 3R"
