"""Convenience helpers for running the grouping pipelines end-to-end."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from .components import ComponentConfig, ComponentFinder, ComponentResult, SpanningResult

MODES = ("components", "spanning", "similarity")


def run_file(
    input_path: str | Path,
    output_path: str | Path,
    config: Optional[ComponentConfig] = None,
    mode: str = "components",
) -> ComponentResult | SpanningResult | None:
    """Run the pipeline selected by `mode` on `input_path` and write the results."""

    input_path = Path(input_path)
    output_path = Path(output_path)

    if mode not in MODES:
        print(f"ERROR: Unknown mode '{mode}'. Choose one of: {', '.join(MODES)}.")
        return None

    try:
        dataframe = _load_dataframe(input_path)
    except FileNotFoundError:
        print(f"ERROR: Input file not found at '{input_path}'.")
        return None
    except ValueError:
        print(f"ERROR: Unsupported file format for '{input_path}'. Please provide a CSV or Excel file.")
        return None

    finder = ComponentFinder(config or ComponentConfig())
    try:
        if mode == "spanning":
            return finder.span(dataframe, output_path)
        if mode == "similarity":
            return finder.link(dataframe, output_path)
        return finder.connect(dataframe, output_path)
    except KeyError as exc:
        print(f"ERROR: {exc.args[0]} (input: '{input_path}'). Please check the column options.")
        return None
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return None


def _load_dataframe(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str)
    if suffix in {".xls", ".xlsx"}:
        return pd.read_excel(path, dtype=str)
    raise ValueError("unsupported format")
