"""Encode planning: map a MediaProbe to an EncodePlan.

Usage:
    from chromecastise.policy import plan_encode, EncodePlan
"""

from chromecastise.policy.planner import build_output_path, plan_encode
from chromecastise.policy.types import EncodePlan

__all__ = [
    "EncodePlan",
    "build_output_path",
    "plan_encode",
]
