import time
import functools
import logging
import psutil
import os
from collections import deque
from typing import Callable, Optional, Any, List, Dict
from datetime import datetime

logger = logging.getLogger("PerformanceMonitor")

class PerformanceMonitor:
    """
    Centralized store for performance metrics.
    Keeps the most recent entries in memory for the dashboard to display.
    """
    MAX_ENTRIES = 50
    _logs: deque = deque(maxlen=MAX_ENTRIES)

    @staticmethod
    def get_logs() -> List[Dict[str, Any]]:
        """Newest first."""
        return list(PerformanceMonitor._logs)

    @staticmethod
    def log_event(operation: str, duration_sec: float, memory_delta_mb: float = 0.0, details: str = ""):
        entry = {
            "Timestamp": datetime.now().strftime("%H:%M:%S"),
            "Operation": operation,
            "Duration (s)": round(duration_sec, 4),
            "Memory Delta (MB)": round(memory_delta_mb, 2),
            "Details": details
        }

        PerformanceMonitor._logs.appendleft(entry)

        # Also log to standard Python logger
        logger.info(f"PERF | {operation} | {duration_sec:.4f}s | {memory_delta_mb:.2f}MB | {details}")

    @staticmethod
    def clear_logs():
        PerformanceMonitor._logs.clear()

def get_process_memory_mb() -> float:
    """Returns current process memory usage in MB."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024

def track_performance(operation_name: Optional[str] = None, describe: Optional[Callable[[Any], str]] = None):
    """
    Decorator to track execution time and memory impact of a function.
    `describe` turns the return value into the entry's Details text.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            op_name = operation_name or func.__name__
            details = ""

            start_time = time.perf_counter()
            start_mem = get_process_memory_mb()

            try:
                result = func(*args, **kwargs)
                if describe is not None:
                    details = describe(result)
                return result
            finally:
                end_time = time.perf_counter()
                end_mem = get_process_memory_mb()

                duration = end_time - start_time
                mem_delta = end_mem - start_mem

                PerformanceMonitor.log_event(op_name, duration, mem_delta, details)

        return wrapper
    return decorator
