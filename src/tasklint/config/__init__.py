"""Validation policy and its loader."""

from tasklint.config.loader import load_policy
from tasklint.config.policy import Policy

__all__ = ["Policy", "load_policy"]
