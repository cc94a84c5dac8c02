"""
planerelay: Plane webhook relay.

Receives signed issue-tracker webhooks, pairs the near-duplicate deliveries
that describe one change, and forwards a summary to a Discord webhook.
"""

__version__ = "1.0.0"
