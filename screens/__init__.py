"""TMS console screens, one per sidebar route."""
