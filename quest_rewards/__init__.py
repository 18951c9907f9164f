"""Reward calculation and audit engine for the quest tracker."""

__version__ = "1.0.0"
