import os
from pathlib import Path
from typing import Dict

import pandas as pd
from dotenv import load_dotenv

from .config import build_settings, Settings


class SourceOpenError(Exception):
    """Raised when the workbook cannot be opened at all."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Can't open workbook '{self.path}': {reason}")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").strip().upper() in {"1", "TRUE", "YES", "Y"}


def load_env_file() -> None:
    """Load .env from the working directory; variables already set win."""
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=False)


def load_settings(
    input_xlsx=None,
    output_dir=None,
    group_by=None,
    window_size=None,
    shared_window=None,
    image_format=None,
) -> Settings:
    load_env_file()
    input_xlsx = input_xlsx or os.getenv("SPENDING_INPUT_XLSX")
    output_dir = output_dir or os.getenv("SPENDING_OUTPUT_DIR", "outputs")
    group_by = group_by or os.getenv("SPENDING_GROUP_BY", "month")
    if window_size is None:
        window_size = os.getenv("SPENDING_WINDOW", "12").strip()
    if shared_window is None:
        shared_window = _env_flag("SPENDING_SHARED_WINDOW")
    image_format = image_format or os.getenv("SPENDING_IMAGE_FORMAT", "svg")

    if not input_xlsx:
        raise ValueError("SPENDING_INPUT_XLSX must be provided (path to the transactions workbook)")
    return build_settings(
        input_xlsx,
        output_dir,
        group_by=group_by,
        window_size=int(window_size),
        shared_window=shared_window,
        image_format=image_format,
    )


def ensure_dirs(s: Settings):
    s.output_dir.mkdir(parents=True, exist_ok=True)
    s.charts_dir.mkdir(parents=True, exist_ok=True)


def open_workbook(path: Path) -> Dict[str, pd.DataFrame]:
    """
    Read every worksheet as raw cells: no header inference, no dtype coercion.
    Empty cells come back as NaN.
    """
    path = Path(path)
    if not path.exists():
        raise SourceOpenError(path, "file not found")
    try:
        return pd.read_excel(path, sheet_name=None, header=None, dtype=object, engine="openpyxl")
    except Exception as e:
        raise SourceOpenError(path, str(e)) from e
