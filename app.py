"""
Main Application File for the Wafer Yield Simulation Streamlit Dashboard.
Runs a Monte Carlo experiment over randomly generated tiled wafers and shows how many
Large, Medium and Small chips each wafer yields.
"""
import streamlit as st
import numpy as np
import pandas as pd

from tileyield.core.config import (
    DEFAULT_CONFIG, DEFAULT_FAULT_FRACTION, DEFAULT_FAULT_PROBABILITY, DEFAULT_TRIALS
)
from tileyield.enums import DeviceClass
from tileyield.experiment import ExperimentParams, run_experiment
from tileyield.io.sample_generator import generate_wafer
from tileyield.io.exporters.excel import generate_excel_report, summary_table
from tileyield.analytics.yield_analysis import chip_window_mask, summarize_results
from tileyield.plotting.charts import create_distribution_figure, create_trend_figure
from tileyield.plotting.maps import create_wafer_map_figure
from tileyield.reporting import format_report
from tileyield.state import SessionStore
from tileyield.utils.logger import configure_logging, get_logger
from tileyield.utils.telemetry import PerformanceMonitor

logger = get_logger(__name__)

def render_sidebar(store: SessionStore) -> None:
    with st.sidebar:
        st.title("🎛️ Control Panel")
        with st.form(key="experiment_form"):
            with st.expander("🧪 Experiment Parameters", expanded=True):
                trials = st.number_input("Wafers (Trials)", min_value=1, value=DEFAULT_TRIALS, step=1)
                fault_probability = st.number_input(
                    "Tile Fault Probability", min_value=0.0, max_value=1.0,
                    value=DEFAULT_FAULT_PROBABILITY, step=0.01, format="%.4f",
                    help="Probability that any single tile is faulty."
                )
                fault_fraction = st.text_input(
                    "Acceptable Fault Fraction", value=DEFAULT_FAULT_FRACTION,
                    help="Largest share of faulty tiles a chip may have, e.g. 0.1 or 3/30."
                )
                seed_text = st.text_input("Seed (Optional)", help="Integer seed for a reproducible run.")
            submitted = st.form_submit_button("🚀 Run Experiment")

        if submitted:
            try:
                params = ExperimentParams(int(trials), float(fault_probability), fault_fraction)
                seed = int(seed_text) if seed_text.strip() else None
            except ValueError as e:
                logger.warning(f"Rejected experiment parameters: {e}")
                st.error(str(e))
                return

            with st.spinner("Simulating wafers..."):
                results_df = run_experiment(params, DEFAULT_CONFIG, seed=seed)
                sample_wafer = generate_wafer(params.fault_probability, DEFAULT_CONFIG, np.random.default_rng(seed))
            store.store_run(params, results_df, sample_wafer, seed)
            st.rerun()

        st.divider()

        with st.expander("📥 Reporting", expanded=True):
            if st.button("Generate Report for Download", disabled=not store.has_results):
                with st.spinner("Generating Excel report..."):
                    summary = summarize_results(store.results_df, DEFAULT_CONFIG)
                    store.report_bytes = generate_excel_report(store.experiment_params, store.results_df, summary)
                st.rerun()

            st.download_button(
                "Download Full Report", data=store.report_bytes or b"",
                file_name="wafer_yield_report.xlsx",
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                disabled=store.report_bytes is None
            )

def render_summary(store: SessionStore) -> None:
    summary = summarize_results(store.results_df, DEFAULT_CONFIG)
    cols = st.columns(len(DeviceClass))
    for col, dc in zip(cols, DeviceClass):
        class_yield = summary[dc]
        with col:
            st.metric(
                f"{dc.value} ({DEFAULT_CONFIG.segments_for(dc)} segments)",
                f"{class_yield.mean_good_chips:.2f} / {class_yield.max_chips}",
                help="Mean good chips per wafer out of the possible placements."
            )
            st.caption(f"Wafers with a good chip: {class_yield.wafers_with_good_chip:.0%}")

    st.dataframe(summary_table(summary), use_container_width=True, hide_index=True)

def render_sample_wafer(store: SessionStore) -> None:
    st.subheader("Sample Wafer")
    selection = st.radio("Highlight chips of class", DeviceClass.values(), horizontal=True,
                         index=DeviceClass.values().index(store.map_device_class.value))
    store.map_device_class = DeviceClass.from_label(selection)

    k = DEFAULT_CONFIG.segments_for(store.map_device_class)
    mask = chip_window_mask(store.sample_wafer, k, store.experiment_params.fault_fraction)
    st.plotly_chart(create_wafer_map_figure(store.sample_wafer, mask, k), use_container_width=True)

def main() -> None:
    """Main function to configure and run the Streamlit application."""
    st.set_page_config(layout="wide", page_title="Wafer Yield Simulation")
    configure_logging()

    store = SessionStore()
    render_sidebar(store)

    st.title("📊 Wafer Yield Simulation")

    if not store.has_results:
        st.info("Set the experiment parameters in the sidebar and press Run Experiment.")
        return

    render_summary(store)
    st.divider()

    chart_col, map_col = st.columns([1.5, 1])
    with chart_col:
        st.plotly_chart(create_distribution_figure(store.results_df, DEFAULT_CONFIG), use_container_width=True)
        st.plotly_chart(create_trend_figure(store.results_df), use_container_width=True)
    with map_col:
        render_sample_wafer(store)

    with st.expander("Per-Wafer Results"):
        st.dataframe(store.results_df, use_container_width=True, hide_index=True)

    with st.expander("Text Report"):
        st.code(format_report(store.experiment_params, store.results_df), language=None)

    with st.expander("Run Details & Performance"):
        st.json({k: str(v) for k, v in store.as_dict().items()})
        logs = PerformanceMonitor.get_logs()
        if logs:
            st.dataframe(pd.DataFrame(logs), use_container_width=True, hide_index=True)

if __name__ == "__main__":
    main()
