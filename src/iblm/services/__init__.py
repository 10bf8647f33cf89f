"""Service layer for iblm.

This module exports the behavioral engine and content pipeline services.
"""

from iblm.services.buffer import ContentBuffer
from iblm.services.clock import SessionClock
from iblm.services.hydration import HydrationPipeline
from iblm.services.metrics import BehaviorMetrics
from iblm.services.policy import decide_next_content
from iblm.services.tracker import HISTORY_WINDOW, InteractionTracker

__all__ = [
    "HISTORY_WINDOW",
    "BehaviorMetrics",
    "ContentBuffer",
    "HydrationPipeline",
    "InteractionTracker",
    "SessionClock",
    "decide_next_content",
]
