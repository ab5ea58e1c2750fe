"""
Portavia Kernel

Shared foundation for the project dashboard back end:
- Structured JSON logging and a typed exception hierarchy
- Injectable clock and total value coercion
- Fact records consumed by the derivation engines
- Read-only SQLAlchemy access to the hosted project tables and views
"""

__version__ = "0.1.0"
