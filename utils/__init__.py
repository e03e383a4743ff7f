"""
Utility modules for Venue Planner
"""
from .logger import logger, get_component_logger, ComponentLogger

__all__ = ['logger', 'get_component_logger', 'ComponentLogger']
