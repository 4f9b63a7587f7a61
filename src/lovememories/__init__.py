"""
lovememories - Private photo and notes sharing application gated by a shared PIN

A small web application for a couple to keep memories together:
- Photo upload with captions, stored on local disk
- Short text notes that can be edited later
- Search by caption or title
- A single shared PIN protecting both the UI and the HTTP API
"""

__version__ = "0.1.0"
__author__ = "lovememories"
__description__ = "Private photo and notes sharing application gated by a shared PIN"
