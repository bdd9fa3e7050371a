from __future__ import annotations
import argparse, logging, sys
from typing import List, Optional

from islready.config import VerifyConfig, load_config
from islready.readiness import ReadinessChecker, log_report, report_to_json

log = logging.getLogger("verify")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Check that camera, runtime and model are ready for ISL inference")
    ap.add_argument("--config", type=str, default=None)
    ap.add_argument("--model-url", type=str, default=None, help="URL or local path of isl_model.onnx")
    ap.add_argument("--camera", type=int, default=None)
    ap.add_argument("--json", action="store_true", help="Also print the report as JSON on stdout")
    ap.add_argument("--verbose", action="store_true")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    try:
        cfg = load_config(args.config) if args.config else VerifyConfig()
    except (FileNotFoundError, ValueError) as e:
        log.error("Invalid configuration: %s", e)
        return 2
    cfg = cfg.with_overrides(model_url=args.model_url, camera_index=args.camera)

    report = ReadinessChecker(cfg).verify()
    log_report(report, log)
    if args.json:
        print(report_to_json(report))
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
