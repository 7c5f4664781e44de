"""HTTP routers for the storefront webapp."""
