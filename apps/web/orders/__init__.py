"""Orders - pricing, the orders collection and the kitchen prep queue."""
