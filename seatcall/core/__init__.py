"""Cross-app primitives shared by the relay, the HTTP API and the services."""
