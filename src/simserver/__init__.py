"""Websocket streaming of simulation snapshots."""
