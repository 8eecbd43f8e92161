"""Application layer: configuration, trading sessions and the replay CLI."""
