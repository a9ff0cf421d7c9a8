"""
Name Analyzer - educational microservice.
Exposes /analyze, /health and /metrics.
"""

__version__ = "1.0.0"
