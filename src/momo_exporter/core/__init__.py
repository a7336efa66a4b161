"""Stats translation engine: extraction, dispatch, catalog building and scraping."""
