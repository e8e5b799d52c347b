"""
errors.py - Exception types raised by InsightGraph

The analysis pipeline itself never raises for empty or unusual text; these
cover the seams around it (config, input files, run bookkeeping).
"""


class InsightGraphError(Exception):
    """Base class for all InsightGraph errors."""


class ConfigError(InsightGraphError):
    """Invalid or unreadable configuration."""


class InputLoadError(InsightGraphError):
    """An input file held no usable prose."""


class AnalysisInProgressError(InsightGraphError):
    """A run was requested while another one is still in flight."""
