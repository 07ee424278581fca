"""Loading OpenAPI documents from files and URLs."""
