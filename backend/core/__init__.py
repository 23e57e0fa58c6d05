"""
Core module containing foundational components for the Failure Dispatch Service.

This module provides:
- The failure taxonomy
- The propagation rule
- The centralized dispatcher and failure boundaries
- Dependency wiring
"""
