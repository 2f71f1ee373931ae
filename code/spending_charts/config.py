from dataclasses import dataclass, field
from pathlib import Path

from .periods import Granularity

IMAGE_FORMATS = ("html", "svg", "png")


@dataclass(frozen=True)
class ColumnHeaders:
    period: str = "Период"
    category: str = "Категория"
    tx_type: str = "Доход/Расход"
    value: str = "RUB"


@dataclass(frozen=True)
class TypeLabels:
    income: str = "Доход"
    outcome: str = "Расход"


@dataclass(frozen=True)
class Settings:
    input_xlsx: Path
    output_dir: Path
    charts_dir: Path
    group_by: Granularity = Granularity.MONTH
    window_size: int = 12
    shared_window: bool = False
    image_format: str = "svg"
    width: int = 1400
    height: int = 740
    scale: float = 1.0
    headers: ColumnHeaders = field(default_factory=ColumnHeaders)
    labels: TypeLabels = field(default_factory=TypeLabels)


def build_settings(
    input_xlsx: str,
    output_dir: str,
    group_by: str = "month",
    window_size: int = 12,
    shared_window: bool = False,
    image_format: str = "svg",
) -> Settings:
    window_size = int(window_size)
    if window_size < 0:
        raise ValueError(f"Window size must be non-negative, got {window_size}")

    image_format = image_format.strip().lower()
    if image_format not in IMAGE_FORMATS:
        raise ValueError(f"Unknown image format: {image_format!r} (expected one of {list(IMAGE_FORMATS)})")

    out = Path(output_dir)
    return Settings(
        input_xlsx=Path(input_xlsx),
        output_dir=out,
        charts_dir=out / "charts",
        group_by=Granularity.parse(group_by),
        window_size=window_size,
        shared_window=shared_window,
        image_format=image_format,
    )
