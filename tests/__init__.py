"""StockMind test suite."""
