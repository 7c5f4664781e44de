"""Services: catalog access, error handling and money helpers."""
