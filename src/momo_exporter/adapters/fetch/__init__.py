"""Fetch collaborators implementing FetchPort."""
