"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants for labels, extensions and placeholders
- exceptions: Custom exception hierarchy
- ingress: HTTP boundary helpers for the Azure Functions entry point
"""
