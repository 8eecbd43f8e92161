"""Core signal logic: bar history, indicators, strategies and the risk gate.

This package contains pure business logic with no I/O dependencies
(no feed, broker, or filesystem access). Collaborators in ntbot_app/
feed it bars and ticks and act on the outputs it produces.
"""
