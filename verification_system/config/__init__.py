"""Static configuration: settings, logging, analyzer catalogue, demo scenarios."""
