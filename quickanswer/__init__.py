# QuickAnswer Package
"""
Instant answers for search queries, resolved locally or with one upstream call.

Handlers (in dispatch order):
  - math: arithmetic with precedence, powers and percentages
  - convert: unit conversion within a category, temperature included
  - hash, base64, url, case, json, slug, escape: text and format utilities
  - definition, dictionary: Free Dictionary API lookups
"""

__version__ = "0.1.0-dev"
