"""HTTP API for the football player chat service."""
