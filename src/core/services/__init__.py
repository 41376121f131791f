"""Services: parsing, routing and dispatch of cache operations."""
