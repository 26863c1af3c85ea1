"""
Domain Layer - Domain-Driven Design (DDD)

This layer contains the business logic and domain models of the application.
It represents the core business concepts and rules, independent of any
technical implementation details.

Components:
- livestock/: Vaccination scheduling, status transitions, reminders and bulk scheduling
- shared/: Common domain logic shared across different subdomains
"""
