# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_inputs, make_segments
"""

from .utils import make_inputs, make_segments, make_step_schedule

__all__ = ["make_inputs", "make_segments", "make_step_schedule"]
