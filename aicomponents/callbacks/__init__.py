"""Callback hooks fired around component runs."""
from aicomponents.callbacks.handler import CallbackHandler, RunInfo, run_on_end, run_on_error, run_on_start

__all__ = ["CallbackHandler", "RunInfo", "run_on_start", "run_on_end", "run_on_error"]
