"""
Survey-driven recommendation engine.

Responsibilities:
- Accept a user's automation goals, current tools and experience level.
- Score every catalog entry against those answers with fixed weights.
- Return the top-N entries by descending score, ties kept in catalog order.
"""
