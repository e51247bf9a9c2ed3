"""mbd/core — Types, configuration, errors, registry and validation."""
