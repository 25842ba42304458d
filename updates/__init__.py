"""
Updates module - Release publishing and client update resolution.

This module handles:
- Release entity and version ordering
- Update checks and download accounting
- Update history tracking
"""
