"""
API module for HTTP interface.

This module contains the FastAPI application and route definitions
for the paper search system.

Endpoints:
- Health check
- Free-text paper search
- Paper details by identifier
- Search UI page
"""
