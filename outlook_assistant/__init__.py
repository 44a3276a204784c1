"""Outlook Assistant CLI package.

Command-line access to Outlook free/busy, other mailboxes' schedules, event
deletion and sending mail through Microsoft Graph.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
