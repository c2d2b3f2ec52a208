"""Customers app package.

Customer records are keyed by phone number. Bookings either reference an
existing customer or register one inline, reactivating a previously
deactivated record when the phone matches.
"""
