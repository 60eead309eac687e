import io
import pandas as pd
import pytest
from tileyield.analytics.yield_analysis import summarize_results
from tileyield.experiment import ExperimentParams
from tileyield.io.exporters.excel import PER_WAFER_SHEET, SUMMARY_SHEET, generate_excel_report, summary_table

@pytest.fixture
def results_df() -> pd.DataFrame:
    return pd.DataFrame({
        'Wafer': [1, 2],
        'Large': [1, 0],
        'Medium': [2, 1],
        'Small': [3, 2],
    })

def test_summary_table(results_df):
    table = summary_table(summarize_results(results_df))
    assert table['Device Class'].tolist() == ['Large', 'Medium', 'Small']
    assert table['Max Chips / Wafer'].tolist() == [1, 2, 3]
    assert table['Mean Good Chips'].tolist() == pytest.approx([0.5, 1.5, 2.5])

def test_generate_excel_report(results_df):
    params = ExperimentParams(2, 0.05, "1/10")
    excel_bytes = generate_excel_report(params, results_df, summarize_results(results_df))
    assert isinstance(excel_bytes, bytes)
    assert excel_bytes[:2] == b'PK'  # xlsx is a zip archive

    sheets = pd.read_excel(io.BytesIO(excel_bytes), sheet_name=None, engine='openpyxl')
    assert set(sheets) == {SUMMARY_SHEET, PER_WAFER_SHEET}
    pd.testing.assert_frame_equal(sheets[PER_WAFER_SHEET], results_df)
