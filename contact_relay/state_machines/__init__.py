"""
State machine infrastructure for multi-step flows.
"""

from .base import FlowMachine
from .submission_flow import SubmissionFlowMachine

__all__ = ["FlowMachine", "SubmissionFlowMachine"]
