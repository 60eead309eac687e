import pytest
import pandas as pd
from tileyield import state
from tileyield.enums import DeviceClass
from tileyield.experiment import ExperimentParams
from tileyield.io.sample_generator import generate_wafer
from tileyield.state import SessionStore

class FakeSessionState(dict):
    """Dict with attribute access, standing in for st.session_state."""
    def __getattr__(self, key):
        try:
            return self[key]
        except KeyError as e:
            raise AttributeError(key) from e

    def __setattr__(self, key, value):
        self[key] = value

@pytest.fixture
def store(monkeypatch) -> SessionStore:
    monkeypatch.setattr(state.st, "session_state", FakeSessionState())
    return SessionStore()

def test_defaults(store):
    assert not store.has_results
    assert store.report_bytes is None
    assert store.map_device_class is DeviceClass.SMALL

def test_store_run_resets_report(store):
    store.report_bytes = b"old"
    params = ExperimentParams(1, 0.0, 0.1)
    results = pd.DataFrame({'Wafer': [1], 'Large': [1], 'Medium': [2], 'Small': [3]})
    store.store_run(params, results, generate_wafer(0.0), seed=3)

    assert store.has_results
    assert store.report_bytes is None
    assert store.as_dict() == {'experiment_params': params, 'trials_run': 1, 'seed': 3}

    store.clear()
    assert not store.has_results

def test_map_device_class_round_trip(store):
    store.map_device_class = DeviceClass.LARGE
    assert store.map_device_class is DeviceClass.LARGE
