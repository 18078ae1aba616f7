"""Audio file loading and manifest export."""
