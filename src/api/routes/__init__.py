"""
API Routes - HTTP endpoint handlers

Each area (layers, transitions, effects, background, auto-advance, system)
has its own router; all are mounted under /api/v1.
"""
