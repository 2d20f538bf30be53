"""Routing — ordered page table with ``:name`` path parameters.

Pages are registered during setup and compiled into an immutable
router when the app freezes.
"""
