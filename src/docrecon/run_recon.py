import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import ReconConfig
from .engine import reconcile_checked
from .errors import ConfigError, DocReconError
from .ingest import load_dataset
from .mapping import load_field_mappings, suggest_mappings
from .report import RESULTS_FILE, write_outputs
from .results import ResultSet
from .rules import default_tolerances, load_tolerances

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> ReconConfig:
    defaults = ReconConfig()
    parser = argparse.ArgumentParser(description="Reconcile two invoice exports on a reference key")
    parser.add_argument("--file-a", default=defaults.file_a_path, help="First export (CSV or XLSX)")
    parser.add_argument("--file-b", default=defaults.file_b_path, help="Second export (CSV or XLSX)")
    parser.add_argument("--mappings", default=defaults.mappings_path, help="JSON list of field mappings")
    parser.add_argument("--tolerances", default=defaults.tolerances_path, help="JSON list of tolerance settings")
    parser.add_argument("--outputs", default=defaults.outputs_dir, help="Directory to write outputs")
    parser.add_argument("--auto-map", action="store_true",
                        help="Use recognized-field mappings and default tolerances when config files are missing")
    parser.add_argument("--log-level", default=defaults.log_level,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    return ReconConfig(
        file_a_path=args.file_a,
        file_b_path=args.file_b,
        mappings_path=args.mappings,
        tolerances_path=args.tolerances,
        outputs_dir=args.outputs,
        auto_map=args.auto_map,
        log_level=args.log_level,
    )


def run(cfg: ReconConfig) -> ResultSet:
    file_a = load_dataset(cfg.file_a_path)
    file_b = load_dataset(cfg.file_b_path)

    if os.path.exists(cfg.mappings_path) or not cfg.auto_map:
        mappings = load_field_mappings(cfg.mappings_path)
    else:
        mappings = suggest_mappings(file_a, file_b)
        logger.info("Using %d suggested mappings", len(mappings))
    if not mappings:
        raise ConfigError("No field mappings to reconcile with")

    if os.path.exists(cfg.tolerances_path) or not cfg.auto_map:
        tolerances = load_tolerances(cfg.tolerances_path)
    else:
        tolerances = default_tolerances(mappings)
        logger.info("Using %d default tolerances", len(tolerances))

    results = ResultSet(reconcile_checked(file_a, file_b, mappings, tolerances))
    write_outputs(cfg.outputs_dir, results, mappings)
    return results


def main(argv: Optional[List[str]] = None) -> int:
    cfg = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, cfg.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        results = run(cfg)
    except DocReconError as e:
        logger.error("Reconciliation failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    counts = results.counts()
    print(f"Wrote outputs to {cfg.outputs_dir}/ ({RESULTS_FILE})")
    print(f"Matched: {counts['matched']} | Mismatched: {counts['mismatched']} | "
          f"Missing in A: {counts['missing_in_a']} | Missing in B: {counts['missing_in_b']} | "
          f"Duplicates: {counts['duplicate']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
