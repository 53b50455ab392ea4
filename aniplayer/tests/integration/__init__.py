"""
Integration Tests Module

Contains integration tests for component interactions:
- test_watchdog_rescan: File system events through to a background rescan
- test_migrations: Alembic upgrade and stamp
- test_cli: Command line workflow
"""
