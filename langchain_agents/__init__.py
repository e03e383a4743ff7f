"""
LangChain integration for Venue Planner
"""
from .venue_tools import VenueAssistantTools

__all__ = ['VenueAssistantTools']
