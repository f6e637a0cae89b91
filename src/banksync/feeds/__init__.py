"""Remote transaction feed adapters."""
