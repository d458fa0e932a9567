"""
Queue Service API v1 Endpoints Package

Endpoints:
    - stores.py: Live store endpoints (merged roster + queue data, summary stats)
"""
