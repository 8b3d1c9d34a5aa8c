"""
Verification of a materializer run.

Modules:
    parse_summary - ParseSummary counters, reconciliation and final report
"""

from .parse_summary import ParseSummary

__all__ = ['ParseSummary']
