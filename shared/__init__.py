"""
Shared Kernel

Framework-light building blocks reused by the domain apps: value objects
for booking intervals and small database helpers.
"""
