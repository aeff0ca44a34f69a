"""
Console error taxonomy.

Remote failures (store, collection job) and rejected operator requests all
derive from ConsoleError so the routes can map them in one place.
"""


class ConsoleError(Exception):
    """Base class for everything the lifecycle controller raises."""


class StoreUnavailable(ConsoleError):
    """The lead store read or write failed."""
    def __init__(self, operation, reason=''):
        self.operation = operation
        self.reason = reason
        msg = f"Lead store unavailable during {operation}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class TriggerUnavailable(ConsoleError):
    """The collection job could not be reached or answered with an error."""
    def __init__(self, platform, reason=''):
        self.platform = platform
        self.reason = reason
        msg = f"Collection job for '{platform}' failed"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class CollectionInProgress(ConsoleError):
    """Another collection run is still in flight."""
    def __init__(self, requested, running):
        self.requested = requested
        self.running = running
        super().__init__(f"Cannot start '{requested}' — collection for '{running}' is still running")


class UnknownPlatform(ConsoleError):
    """The requested platform has no collection job configured."""
    def __init__(self, platform):
        self.platform = platform
        super().__init__(f"Unsupported platform: {platform}")


class LeadNotFound(ConsoleError):
    """No lead with this id in the console's current view."""
    def __init__(self, lead_id):
        self.lead_id = lead_id
        super().__init__(f"Lead {lead_id} not found")


class InvalidTransition(ConsoleError):
    """The requested status change is not an edge of the lead workflow."""
    def __init__(self, lead_id, current, requested):
        self.lead_id = lead_id
        self.current = current
        self.requested = requested
        super().__init__(f"Lead {lead_id} cannot move from '{current}' to '{requested}'")
