"""Services Layer — request handlers and the dispatcher that routes to them."""
