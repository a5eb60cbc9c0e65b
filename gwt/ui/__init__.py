"""Textual prompt widgets for gwt."""
