"""Service catalogue app.

Master list of treatments (single and combo) with durations and base
prices. Branch-specific prices live in ``apps.branches``.
"""
