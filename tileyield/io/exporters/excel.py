"""
Excel Export Logic.
Writes experiment results to a two-sheet workbook (Summary, Per-Wafer) using xlsxwriter.
"""
import pandas as pd
import io
import logging
from datetime import datetime
from typing import Any, Dict
from tileyield.analytics.models import YieldSummary
from tileyield.experiment import ExperimentParams

THEME_COLOR_PRIMARY = '#1F497D'       # Dark Blue (Headers)
FONT_MAIN = 'Calibri'

SUMMARY_SHEET = 'Summary'
PER_WAFER_SHEET = 'Per-Wafer'

logger = logging.getLogger(__name__)

def _define_formats(workbook) -> Dict[str, Any]:
    base_fmt = {'font_name': FONT_MAIN, 'font_size': 11, 'border': 0}

    return {
        'title': workbook.add_format({**base_fmt, 'bold': True, 'font_size': 18, 'font_color': THEME_COLOR_PRIMARY, 'valign': 'vcenter'}),
        'label': workbook.add_format({**base_fmt, 'bold': True, 'font_color': '#595959'}),
        'header': workbook.add_format({
            **base_fmt, 'bold': True, 'text_wrap': True, 'valign': 'top',
            'fg_color': THEME_COLOR_PRIMARY, 'font_color': 'white',
            'border': 1, 'align': 'center'
        }),
        'cell': workbook.add_format({**base_fmt, 'border': 1}),
        'int': workbook.add_format({**base_fmt, 'num_format': '#,##0', 'border': 1, 'align': 'center'}),
        'float': workbook.add_format({**base_fmt, 'num_format': '0.000', 'border': 1, 'align': 'center'}),
        'percent': workbook.add_format({**base_fmt, 'num_format': '0.0%', 'border': 1, 'align': 'center'}),
    }

def _auto_fit_columns(worksheet, df: pd.DataFrame, start_col: int = 0, padding: int = 2):
    """Adjusts column widths based on content."""
    for i, col in enumerate(df.columns):
        max_len = max(
            df[col].astype(str).map(len).max() if not df[col].empty else 0,
            len(str(col))
        )
        worksheet.set_column(start_col + i, start_col + i, max_len + padding)

def summary_table(summary: YieldSummary) -> pd.DataFrame:
    """One row per device class with the KPIs shown on the Summary sheet."""
    return pd.DataFrame([
        {
            'Device Class': dc.value,
            'Max Chips / Wafer': cy.max_chips,
            'Mean Good Chips': cy.mean_good_chips,
            'Std Good Chips': cy.std_good_chips,
            'Wafers With Good Chip': cy.wafers_with_good_chip,
            'Window Yield': cy.window_yield,
        }
        for dc, cy in summary.classes.items()
    ])

def _create_summary_sheet(writer, formats, params: ExperimentParams, summary: YieldSummary):
    workbook = writer.book
    sheet = workbook.add_worksheet(SUMMARY_SHEET)
    writer.sheets[SUMMARY_SHEET] = sheet

    sheet.write('A1', 'Wafer Yield Simulation', formats['title'])
    sheet.write('A2', 'Generated:', formats['label'])
    sheet.write('B2', datetime.now().strftime("%Y-%m-%d %H:%M:%S"))
    sheet.write('A3', 'Trials:', formats['label'])
    sheet.write('B3', params.trials)
    sheet.write('A4', 'Tile Fault Probability:', formats['label'])
    sheet.write('B4', params.fault_probability)
    sheet.write('A5', 'Acceptable Fault Fraction:', formats['label'])
    sheet.write('B5', str(params.fault_fraction))

    table = summary_table(summary)
    start_row = 7
    for col_num, value in enumerate(table.columns):
        sheet.write(start_row - 1, col_num, value, formats['header'])

    column_formats = ['cell', 'int', 'float', 'float', 'percent', 'percent']
    for row_num, row in enumerate(table.itertuples(index=False)):
        for col_num, value in enumerate(row):
            # numpy scalars -> native types for xlsxwriter
            value = value.item() if hasattr(value, 'item') else value
            sheet.write(start_row + row_num, col_num, value, formats[column_formats[col_num]])

    _auto_fit_columns(sheet, table)
    sheet.set_column(0, 0, 26)

def _create_per_wafer_sheet(writer, formats, results_df: pd.DataFrame):
    results_df.to_excel(writer, sheet_name=PER_WAFER_SHEET, index=False)
    sheet = writer.sheets[PER_WAFER_SHEET]

    for col_num, value in enumerate(results_df.columns):
        sheet.write(0, col_num, value, formats['header'])
    _auto_fit_columns(sheet, results_df)
    sheet.freeze_panes(1, 0)

def generate_excel_report(params: ExperimentParams, results_df: pd.DataFrame, summary: YieldSummary) -> bytes:
    """
    Generates the experiment workbook and returns it as .xlsx bytes.
    """
    output_buffer = io.BytesIO()

    with pd.ExcelWriter(output_buffer, engine='xlsxwriter') as writer:
        formats = _define_formats(writer.book)
        _create_summary_sheet(writer, formats, params, summary)
        _create_per_wafer_sheet(writer, formats, results_df)

    logger.info(f"Excel report generated for {len(results_df)} wafers")
    return output_buffer.getvalue()
