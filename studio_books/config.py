"""Central configuration for the studio books package."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from decimal import Context, Decimal
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.environ.get("STUDIO_BOOKS_DATA_DIR", BASE_DIR / "data"))
EXPORT_DIR = DATA_DIR / "exports"


@dataclass(slots=True, frozen=True)
class Settings:
    decimal_context: Context
    balance_tolerance: Decimal
    rows_per_page: int
    currency_symbol: str
    fetch_workers: int
    timezone: tzinfo
    data_dir: Path
    export_dir: Path


SETTINGS = Settings(
    decimal_context=Context(prec=28),
    balance_tolerance=Decimal("1"),
    rows_per_page=25,
    currency_symbol="₹",
    fetch_workers=7,
    timezone=timezone.utc,
    data_dir=DATA_DIR,
    export_dir=EXPORT_DIR,
)
