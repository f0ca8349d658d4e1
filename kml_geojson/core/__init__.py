"""Core utilities and shared infrastructure.

- config: Converter configuration loading and validation
- constants: Named constants (namespaces, defaults, style prefixes)
- exceptions: Custom exception hierarchy
"""
