"""Branches app package.

Physical shop locations, their treatment rooms and branch-level service
pricing. Rooms are the second bookable resource next to therapists.
"""
