"""Per-commit classifiers: message category, path subsystem, size."""

from .categories import CATEGORIES, classify_category, is_conventional_commit
from .size import chunkiness_label, classify_size
from .subsystems import SUBSYSTEMS, classify_subsystem, is_ai_config_path, subsystems_for_paths

__all__ = [
    "CATEGORIES",
    "SUBSYSTEMS",
    "chunkiness_label",
    "classify_category",
    "classify_size",
    "classify_subsystem",
    "is_ai_config_path",
    "is_conventional_commit",
    "subsystems_for_paths",
]
