"""
Command Line Interface Package

Entry point: ``tezsync``

Command Structure:
- tezsync version: Show version information
- tezsync config: Show the active configuration
- tezsync sync ADDRESS: Synchronise an account and adopt the new snapshot
"""
