"""Campus event coordination backend."""
