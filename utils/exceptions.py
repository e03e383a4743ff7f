"""
Custom exceptions for Venue Planner
"""

class VenuePlannerException(Exception):
    """Base exception for Venue Planner application"""
    def __init__(self, message: str, error_code: str = None, context: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "GENERIC_ERROR"
        self.context = context or {}

class ConfigurationException(VenuePlannerException):
    """Exception related to configuration issues"""
    pass

class DataValidationException(VenuePlannerException):
    """Exception raised when data validation fails"""
    pass

class LaborRuleFormatException(DataValidationException):
    """A labor rule payload is not valid JSON or does not fit its rule type"""
    pass

class DatabaseException(VenuePlannerException):
    """Exception related to database operations"""
    pass

class FunctionCallException(VenuePlannerException):
    """Exception raised for unknown or malformed assistant function calls"""
    pass
