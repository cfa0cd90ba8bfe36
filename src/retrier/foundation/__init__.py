"""Foundation layer: errors, configuration, policy registry."""
