"""Agent cognition stack.

Each stage of ``Agent.decide_and_respond`` lives in its own module:
evaluation (weighting), modeling (model of other), memory (temporal
integration), decision (response probability) and responses (template
crafting).
"""

from .evaluation import clamp, evaluate_message
from .modeling import OtherModels, infer_style
from .memory import ExperienceLog
from .decision import response_probability
from .responses import (
    RandomSource,
    classify_inbound,
    craft_response,
    initiation_topics,
)

__all__ = [
    "clamp",
    "evaluate_message",
    "OtherModels",
    "infer_style",
    "ExperienceLog",
    "response_probability",
    "RandomSource",
    "classify_inbound",
    "craft_response",
    "initiation_topics",
]
