"""Core services: settings, logging and the poll scheduler."""
