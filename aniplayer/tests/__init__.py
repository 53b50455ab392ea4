"""
Tests Module

Contains test suites for all application layers:
- unit: Unit tests for individual components
- integration: Real watchdog events, migrations and the command line
"""
