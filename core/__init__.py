"""
Core - shared infrastructure for FreelanceHub

This module provides foundational components:
- Base models with timestamps
- The outbox for side effects (notifications, activity log)
- API exception taxonomy and the DRF exception handler
- Upload validation
"""
