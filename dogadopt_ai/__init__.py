"""
DogAdopt AI - UK Dog Adoption Listings and Chat Assistant

This package contains the main orchestrator agent and specialized sub-agents
for browsing adoptable dogs, looking up rescues and answering chat questions.
"""

__version__ = "1.0.0"

from .agent import DogAdoptMainAgent

__all__ = ["DogAdoptMainAgent"]
