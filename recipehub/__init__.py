"""
Workflow recipe hub backend.

Responsibilities:
- Hold the in-memory recipe catalog and survey submissions.
- Filter, search and sort the catalog for browsing.
- Score catalog entries against survey answers for recommendations.
"""
