"""
Core module for shared configuration, schemas, and utilities.

This module provides foundational components used across the application:
- Configuration management
- Pydantic schemas for data validation
- Error taxonomy mapped to HTTP statuses
- The in-memory response cache
"""
