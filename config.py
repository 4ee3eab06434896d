import json
import logging
from pathlib import Path

DEFAULT_CONFIG = {
    "difficulty": "medium",
    "difficulties": {
        "easy": {"opening_depth": 2, "midgame_depth": 3, "endgame_depth": 4, "node_limit": 5_000},
        "medium": {"opening_depth": 4, "midgame_depth": 5, "endgame_depth": 8, "node_limit": 50_000},
        "hard": {"opening_depth": 5, "midgame_depth": 6, "endgame_depth": 10, "node_limit": 200_000},
    },
}


def _copy_defaults() -> dict:
    merged = DEFAULT_CONFIG.copy()
    merged["difficulties"] = {k: dict(v) for k, v in DEFAULT_CONFIG["difficulties"].items()}
    return merged


def load_config(path: str = "config.json") -> dict:
    p = Path(path)
    if not p.exists():
        return _copy_defaults()
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logging.warning(f"[Config] Could not read {p}: {e}; using defaults")
        return _copy_defaults()
    if not isinstance(data, dict):
        logging.warning(f"[Config] {p} does not hold a JSON object; using defaults")
        return _copy_defaults()

    # Merge with defaults (shallow merge)
    merged = _copy_defaults()
    merged.update({k: v for k, v in data.items() if v is not None and k != "difficulties"})
    # Merge nested difficulties per profile
    if isinstance(data.get("difficulties"), dict):
        merged_d = merged["difficulties"]
        for level, profile in data["difficulties"].items():
            if isinstance(profile, dict):
                merged_d.setdefault(level, {}).update(profile)
    return merged
