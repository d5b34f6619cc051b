"""Component tag compilation."""
