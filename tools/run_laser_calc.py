#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

# Allow running as "python tools/run_laser_calc.py" (so repo root is importable)
sys.path.insert(0, str(ROOT))

from laser_core.classifier import classify  # noqa: E402
from laser_core.config import load_config, parse_mode  # noqa: E402
from laser_core.errors import InvalidInputError  # noqa: E402
from laser_core.export_payload import build_payload, classification_payload  # noqa: E402
from laser_core.logging_config import setup_logging  # noqa: E402
from laser_core.records import record_from_spec, spec_from_record, wants_auto_time_base  # noqa: E402

log = logging.getLogger("laser_core.tools.run_laser_calc")


def _load_records(path: Path) -> list[dict]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict) and "records" in data:
        data = data["records"]
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise InvalidInputError(f"{path}: expected a list of records or {{\"records\": [...]}}")
    return data


def _record_from_args(args: argparse.Namespace) -> dict:
    record = {
        "wavelength_nm": args.wavelength_nm,
        "emission_type": args.emission_type,
        "power_W": args.power_w,
        "pulse_energy_J": args.pulse_energy_j,
        "pulse_width_s": args.pulse_width_s,
        "repetition_rate_Hz": args.repetition_rate_hz,
        "beam_diameter_mm": args.beam_diameter_mm,
        "exposure_time_s": args.exposure_time_s,
        "angular_subtense_mrad": args.angular_subtense_mrad,
        "auto_time_base": True if args.auto_time_base else None,
    }
    return {k: v for k, v in record.items() if v is not None}


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        description="Classify lasers per IEC 60825-1 from JSON records or a single record given by flags."
    )
    ap.add_argument("--input", default=None, help="JSON file: a list of records or {\"records\": [...]}.")
    ap.add_argument("--wavelength-nm", type=float, default=None)
    ap.add_argument("--emission-type", choices=("CW", "Pulsed"), default="CW")
    ap.add_argument("--power-w", type=float, default=None, help="CW output power, W.")
    ap.add_argument("--pulse-energy-j", type=float, default=None)
    ap.add_argument("--pulse-width-s", type=float, default=None)
    ap.add_argument("--repetition-rate-hz", type=float, default=None, help="0 or absent = single pulse.")
    ap.add_argument("--beam-diameter-mm", type=float, default=None, help="Default: 7 mm.")
    ap.add_argument("--exposure-time-s", type=float, default=None)
    ap.add_argument("--angular-subtense-mrad", type=float, default=None)
    ap.add_argument(
        "--auto-time-base",
        action="store_true",
        help="Test each class at its own classification time base (--exposure-time-s may be omitted).",
    )
    ap.add_argument(
        "--mode",
        choices=("LITERAL", "CORRECTED"),
        default=None,
        help="Correction factor mode (default: LASER_CALC_CORRECTION_MODE or LITERAL).",
    )
    ap.add_argument("--out", default=None, help="Output JSON path (default: stdout).")
    ap.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    args = ap.parse_args(argv)

    try:
        setup_logging(args.log_level)
        config = load_config()
        if args.mode:
            config = replace(config, correction_factor_mode=parse_mode(args.mode))

        if args.input:
            records = _load_records(Path(args.input))
        elif args.wavelength_nm is not None:
            records = [_record_from_args(args)]
        else:
            raise InvalidInputError("either --input or --wavelength-nm is required")

        items = []
        for idx, record in enumerate(records):
            if args.auto_time_base and isinstance(record, dict):
                record = {**record, "auto_time_base": True}
            spec, exposure, beam = spec_from_record(record, ctx=f"record #{idx}", config=config)
            auto = wants_auto_time_base(record)
            result = classify(spec, exposure, beam, auto_time_base=auto, config=config)
            log.info("record #%d: %s", idx, result.laser_class.value)
            items.append(
                {"input": record_from_spec(spec, exposure, auto_time_base=auto), **classification_payload(result)}
            )
    except (InvalidInputError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    payload = build_payload(items)
    text = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
