"""Core domain package for pawlog.

Core contains the notification rules, aggregation, and per-day dismissal
logic without any database or rendering code, keeping the business logic
portable across storage backends.
"""
