"""FleetOps API: authentication and profile service for the fleet dashboard."""

__version__ = "0.1.0"
