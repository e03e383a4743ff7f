"""
Web interface for Venue Planner
"""
