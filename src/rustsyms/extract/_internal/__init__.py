"""Internal implementation of Rust symbol extraction."""
