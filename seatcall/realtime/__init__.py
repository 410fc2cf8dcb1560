"""Realtime relay (Socket.IO).

Holds the connection registry, the signaling router, the chat relay and the
namespace that wires them to Socket.IO events. Calls, seats and chat history
live in their own apps; this package only routes and publishes.
"""
