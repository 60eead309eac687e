"""
State Management Module.
Implements the 'Store' pattern to unify access to Streamlit's session state.
"""
import streamlit as st
import pandas as pd
from dataclasses import dataclass
from typing import Optional, Dict, Any
from tileyield.enums import DeviceClass
from tileyield.core.models import WaferMap
from tileyield.experiment import ExperimentParams

@dataclass
class SessionStore:
    """
    Centralized store for application state.
    Wraps st.session_state to provide typed access and centralized modification logic.
    """

    def __post_init__(self):
        """Initialize default state values if they don't exist."""
        defaults = {
            'report_bytes': None,
            'experiment_params': None,
            'results_df': None,
            'sample_wafer': None,
            'seed': None,
            'map_device_class': DeviceClass.SMALL.value,
        }

        for key, value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = value

    # --- Properties for Typed Access ---

    @property
    def experiment_params(self) -> Optional[ExperimentParams]:
        return st.session_state.experiment_params

    @experiment_params.setter
    def experiment_params(self, params: Optional[ExperimentParams]):
        st.session_state.experiment_params = params

    @property
    def results_df(self) -> Optional[pd.DataFrame]:
        return st.session_state.results_df

    @results_df.setter
    def results_df(self, df: Optional[pd.DataFrame]):
        st.session_state.results_df = df

    @property
    def sample_wafer(self) -> Optional[WaferMap]:
        return st.session_state.sample_wafer

    @sample_wafer.setter
    def sample_wafer(self, wafer: Optional[WaferMap]):
        st.session_state.sample_wafer = wafer

    @property
    def seed(self) -> Optional[int]:
        return st.session_state.seed

    @seed.setter
    def seed(self, val: Optional[int]):
        st.session_state.seed = val

    @property
    def map_device_class(self) -> DeviceClass:
        return DeviceClass.from_label(st.session_state.map_device_class)

    @map_device_class.setter
    def map_device_class(self, device_class: DeviceClass):
        st.session_state.map_device_class = device_class.value

    @property
    def report_bytes(self) -> Optional[bytes]:
        return st.session_state.report_bytes

    @report_bytes.setter
    def report_bytes(self, data: Optional[bytes]):
        st.session_state.report_bytes = data

    @property
    def has_results(self) -> bool:
        return self.results_df is not None and self.experiment_params is not None

    def store_run(self, params: ExperimentParams, results_df: pd.DataFrame, sample_wafer: WaferMap, seed: Optional[int]):
        """Replaces the current run; any previously generated report is discarded."""
        self.experiment_params = params
        self.results_df = results_df
        self.sample_wafer = sample_wafer
        self.seed = seed
        self.report_bytes = None

    def clear(self):
        self.experiment_params = None
        self.results_df = None
        self.sample_wafer = None
        self.report_bytes = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            'experiment_params': self.experiment_params,
            'trials_run': 0 if self.results_df is None else len(self.results_df),
            'seed': self.seed,
        }
