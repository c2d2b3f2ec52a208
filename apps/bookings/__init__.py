"""Bookings app package.

Appointments of customers for one or more services, optionally assigned
to a therapist and a room. The booking engine in ``services`` derives
each booking's end time from its services and refuses overlapping
assignments of the same therapist or room. Cancelled bookings never
block a slot.
"""
