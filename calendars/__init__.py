"""Calendar commands for the Outlook assistant.

Free/busy for the signed-in user, other mailboxes' schedules, and listing
or deleting events the user organized. Pipelines live in
``calendars.outlook_pipelines``; argparse handlers in
``calendars.outlook.commands``.
"""
