"""ContestTracker application package.

Aggregates upcoming programming contests from several platforms and sends
reminders to subscribed users.
"""
