"""
Infrastructure Layer

Concrete implementations of the domain repository interfaces and the
in-process domain event bus.
"""
