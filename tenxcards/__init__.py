"""10xCards backend."""
