"""Client for the remote tenant directory."""

from remotable.remote.client import RemoteClient, get_remote_client

__all__ = ["RemoteClient", "get_remote_client"]
