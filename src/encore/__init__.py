"""
Encore - Sign-up onboarding and local event tracking for the streaming client.

Packages:
- encore.tracking: Analytics events, sinks, and the bounded event log
- encore.storage: Durable key-value stores
- onboarding: The wizard state machine (sibling package)
"""

__version__ = "1.0.0"
