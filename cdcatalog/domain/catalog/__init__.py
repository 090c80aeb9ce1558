"""Catalog bounded context: CDs and their tracks."""
