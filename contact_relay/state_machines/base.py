"""
Base state machine class for flow state machines.

Provides structured transition logging and flow info retrieval.
"""

from typing import Any, Dict, Optional

import structlog
from statemachine import StateMachine


class FlowMachine(StateMachine):
    """
    Base class for flow state machines.

    Features:
    - Structured logging on every transition
    - get_flow_info() for status reporting
    """

    def __init__(self, flow_id: Optional[str] = None, **kwargs):
        """
        Args:
            flow_id: Identifier included in transition logs
            **kwargs: Additional context passed to StateMachine
        """
        self.flow_id = flow_id
        self.logger = structlog.get_logger(__name__)
        super().__init__(**kwargs)

    def get_flow_info(self) -> Dict[str, Any]:
        return {
            "state": self.current_state.id,
            "allowed_events": [event.id for event in self.allowed_events],
        }

    def after_transition(self, event: str, source, target) -> None:
        self.logger.info(
            "state_transition",
            machine=type(self).__name__,
            transition_event=event,
            from_state=source.id,
            to_state=target.id,
            flow_id=self.flow_id,
        )
