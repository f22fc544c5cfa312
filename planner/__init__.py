# planner/__init__.py
from .roadmap import build_roadmap, pacing_scenarios

__all__ = ["build_roadmap", "pacing_scenarios"]
