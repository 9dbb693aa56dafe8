"""
Shared library for the Absendo calendar pipeline.
"""
