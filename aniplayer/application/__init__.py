"""
Application Layer - Business Logic and Services

This layer implements the catalog use cases and coordinates between the
Domain and Infrastructure layers.

Modules:
- library_manager: Filename parsing, folder classification, library
  scanning, change watching and the library service
"""
