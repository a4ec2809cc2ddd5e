"""
Energy Monitor API

FastAPI backend for a personal energy-monitoring dashboard: user registration
and login with bearer-token sessions, plus per-user power/energy/cost readings.
"""

__version__ = "1.0.0"
__author__ = "Smart Home Energy Team"
__description__ = "REST backend for personal energy monitoring"
