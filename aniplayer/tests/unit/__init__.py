"""
Unit Tests Module

Contains unit tests for individual components:
- parsing and classification
- scanner, debouncer and change watcher
- repository, configuration and library service
"""
