# src/bay_allocation/utils/config.py
"""
Run configuration for the bay-level transform.

Everything comes from .env (or the process environment) with defaults
that match the client export names, so a bare checkout still runs.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root
BASE_DIR = Path(__file__).resolve().parents[3]
load_dotenv(BASE_DIR / ".env")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


class Config:
    INPUT_DIR = Path(os.getenv("INPUT_DIR", "input"))
    LOCATIONS_FILE = os.getenv("LOCATIONS_FILE", "Locations.csv")
    ARTICLES_FILE = os.getenv("ARTICLES_FILE", "Artikelinformatie.csv")
    PICKS_FILE = os.getenv("PICKS_FILE", "picks.csv")
    CSV_ENCODING = os.getenv("CSV_ENCODING", "utf-8")

    OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", "output"))
    OUTPUT_PREFIX = os.getenv("OUTPUT_PREFIX", "Client").strip() or "Client"

    # Empty string disables the area filter
    PICK_AREA = os.getenv("PICK_AREA", "D").strip()
    MAX_PICKS = _int_env("MAX_PICKS", 100_000)

    @property
    def locations_path(self) -> Path:
        return self.INPUT_DIR / self.LOCATIONS_FILE

    @property
    def articles_path(self) -> Path:
        return self.INPUT_DIR / self.ARTICLES_FILE

    @property
    def picks_path(self) -> Path:
        return self.INPUT_DIR / self.PICKS_FILE

    def __repr__(self):
        return (
            f"<Config input={self.INPUT_DIR} output={self.OUTPUT_DIR} "
            f"area={self.PICK_AREA or '*'} max_picks={self.MAX_PICKS}>"
        )


# Singleton
config = Config()
