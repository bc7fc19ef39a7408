"""
Submission Flow State Machine.

Tracks one contact form through its attempts:
idle -> pending -> success | failure, and back to pending on the next attempt.
Input errors (blank fields, honeypot) go straight to failure without a
request ever being pending.
"""

from statemachine import State

from .base import FlowMachine


class SubmissionFlowMachine(FlowMachine):
    """States map 1:1 to SubmissionOutcome values."""

    idle = State(initial=True, value="idle")
    pending = State(value="pending")
    success = State(value="success")
    failure = State(value="failure")

    begin = idle.to(pending) | success.to(pending) | failure.to(pending)
    resolve = pending.to(success)
    reject = pending.to(failure) | idle.to(failure) | success.to(failure) | failure.to.itself()

    @property
    def in_flight(self) -> bool:
        return self.current_state.id == "pending"
