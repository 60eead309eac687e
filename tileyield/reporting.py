"""
Console Reporting Module.

Formats experiment results as the plain-text yield report: a parameter line, a
column header line, then one tab-delimited row per wafer. Successive reports are
separated by a single blank line.
"""
import pandas as pd
from typing import Iterable, List, Tuple
from tileyield.enums import DeviceClass
from tileyield.experiment import ExperimentParams

def format_header(params: ExperimentParams) -> str:
    return (
        f"Trials: {params.trials}, "
        f"Tile fault probability: {params.fault_probability}, "
        f"Acceptable fault fraction: {params.fault_fraction}"
    )

def format_column_header() -> str:
    return ", ".join(['Wafer'] + DeviceClass.values())

def format_rows(results_df: pd.DataFrame) -> List[str]:
    columns = ['Wafer'] + DeviceClass.values()
    return ["\t".join(str(int(v)) for v in row) for row in results_df[columns].itertuples(index=False)]

def format_report(params: ExperimentParams, results_df: pd.DataFrame) -> str:
    """Report for one experiment, without a trailing newline."""
    lines = [format_header(params), format_column_header()] + format_rows(results_df)
    return "\n".join(lines)

def format_reports(experiments: Iterable[Tuple[ExperimentParams, pd.DataFrame]]) -> str:
    return "\n\n".join(format_report(params, df) for params, df in experiments)
