"""
topman_blog - A Django blog publishing app with a JSON API.

Features:
- Posts organized by category, with tags and view counts
- Slugs derived from titles, unique per author
- Case-insensitive search and paginated listing
- Append-only comments
- One toggleable emoji reaction per user per comment
- Owner/admin authorization for post writes
"""

__version__ = "0.1.0"
