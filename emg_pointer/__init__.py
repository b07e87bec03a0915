"""
EMG pointer client.

Batches armband EMG samples into windows, sends them to the AI server and
smooths the returned predictions into one stable gesture label.
"""

from .ai_server import AIServerInterface, ClientConfig, load_config
from .acquisition import Sample, SampleBatcher
from .feature import GestureSmoother, GestureState

__version__ = "0.1.0"

__all__ = [
    "AIServerInterface",
    "ClientConfig",
    "load_config",
    "Sample",
    "SampleBatcher",
    "GestureSmoother",
    "GestureState",
]
