"""API routers for the Remotable tenant service."""
