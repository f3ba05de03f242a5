import csv
import json
import logging
import os
from typing import Sequence

from .models import FieldMapping
from .results import ResultSet

logger = logging.getLogger(__name__)

RESULTS_FILE = "reconciliation_results.csv"
SUMMARY_FILE = "recon_summary.json"


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def write_outputs(outputs_dir: str,
                  results: ResultSet,
                  mappings: Sequence[FieldMapping]) -> None:
    ensure_dir(outputs_dir)

    # reasons carry commas and "vs" pairs, so quote every cell
    results.to_frame(mappings).to_csv(
        os.path.join(outputs_dir, RESULTS_FILE), index=False, quoting=csv.QUOTE_ALL
    )

    with open(os.path.join(outputs_dir, SUMMARY_FILE), "w") as f:
        json.dump(results.summary(), f, indent=2, default=str)

    logger.info("Wrote %d results to %s", len(results), outputs_dir)
