"""
Order validation orchestrator for Venue Planner
"""
from .order_validator import OrderValidator, validate_order, service_error_report

__all__ = ['OrderValidator', 'validate_order', 'service_error_report']
