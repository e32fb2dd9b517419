"""Middleware for the Remotable tenant service."""
