"""
Domain Layer - Core Catalog Entities

This layer defines the catalog entities, contains domain logic independent
of infrastructure, and provides interfaces for repositories and the file
system.

Modules:
- models: Catalog domain models (Library, Series, Episode, EpisodeType)
- interfaces: Abstract interfaces for the repository and file system
- exceptions: Domain-specific exceptions
"""
