"""Enums for collection fields."""

from enum import Enum


class Role(str, Enum):
    """Profile role enum. Fixed at creation."""
    TRAINER = "trainer"
    CLIENT = "client"


class ViewMode(str, Enum):
    """Per-client detail view mode on the trainer roster."""
    OVERVIEW = "overview"
    DIET = "diet"
    TRAINING = "training"
