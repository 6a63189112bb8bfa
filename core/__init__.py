"""Shared plumbing for the TMS console: settings, API gateway, entity registry, CRUD loop."""
