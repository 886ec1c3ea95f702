"""Adapters — bindings for the external tools flatcgen drives."""
