"""Carrot: local storage and history layer for a daily habit tracker."""

__version__ = "0.1.0"
