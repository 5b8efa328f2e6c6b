"""
Serving - FastAPI application and KServe runtime.

This module is the boundary that invokes the pipelines and serializes
their results (or their typed errors) for HTTP callers.
"""
