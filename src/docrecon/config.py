from dataclasses import dataclass


@dataclass(frozen=True)
class ReconConfig:
    file_a_path: str = "data/raw/file_a.csv"
    file_b_path: str = "data/raw/file_b.csv"
    mappings_path: str = "config/field_mappings.json"
    tolerances_path: str = "config/tolerances.json"
    outputs_dir: str = "outputs"

    auto_map: bool = False             # fall back to suggested mappings / default tolerances
    log_level: str = "INFO"
