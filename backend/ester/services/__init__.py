"""Services Layer - the Library resource and its persistence service."""
