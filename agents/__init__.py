"""
Chat assistant integration for Venue Planner
"""
from .function_calls import FUNCTION_DEFINITIONS, execute_function, build_property_context

__all__ = ['FUNCTION_DEFINITIONS', 'execute_function', 'build_property_context']
