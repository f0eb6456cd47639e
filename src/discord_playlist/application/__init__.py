"""Application layer: ports, the playlist engine, and command handling."""
