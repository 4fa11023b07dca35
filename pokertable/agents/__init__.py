"""
pokertable Agents - AI seats

This module provides the heuristic decision policy, the base agent
interface and the agents that drive AI seats at a local table.
"""

from pokertable.agents.policy import Decision, Personality, decide, hand_strength
from pokertable.agents.base import BaseAgent, HumanAgent
from pokertable.agents.policy_agent import CallAgent, PolicyAgent

__all__ = [
    "Decision",
    "Personality",
    "decide",
    "hand_strength",
    "BaseAgent",
    "HumanAgent",
    "CallAgent",
    "PolicyAgent",
]
