"""Revenue app package.

Daily takings entered by staff at the end of a shift: customers served
and cash, bank transfer and card amounts for the caller's branch.
"""
