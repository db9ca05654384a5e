"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Element names, coordinate bounds, FlightGear header
- exceptions: Custom exception hierarchy
"""
