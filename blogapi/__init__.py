"""Blog backend: posts, owner workflows and paginated search over a pluggable store."""
