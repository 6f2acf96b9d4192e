"""
Recipe catalog package.

Responsibilities:
- Define the canonical Recipe schema and the filter criteria record.
- Own the in-memory catalog store and its id sequences.
- Seed the catalog from the bundled sample CSV.
- Filter and sort catalog snapshots for the browse endpoints.
"""
