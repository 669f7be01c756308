"""
API Layer for the Progress Tracker
REST endpoints for work entries, bugs and reports
"""
