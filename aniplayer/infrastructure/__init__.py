"""
Infrastructure Layer - Persistence and File System

This layer implements data persistence (SQLite/SQLAlchemy) and the local
file system provider (listing plus watchdog change notifications).

Modules:
- database: SQLite database with SQLAlchemy ORM
- file_system: Directory listing and change monitoring
"""
