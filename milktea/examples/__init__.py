"""Bundled demo applications, runnable with ``milktea --example NAME``."""
