"""Core domain logic for crunner."""

from .dispatch import CallDispatcher, CallRequest
from .modes import ExecutionMode, ModeFlags, ReturnType, select_mode
from .params import ParamType, ParameterValue, classify_param, encode_param, prepare_params
from .utils import split_calldata_words, to_native_units

__all__ = [
    "CallDispatcher",
    "CallRequest",
    "ExecutionMode",
    "ModeFlags",
    "ParamType",
    "ParameterValue",
    "ReturnType",
    "classify_param",
    "encode_param",
    "prepare_params",
    "select_mode",
    "split_calldata_words",
    "to_native_units",
]
