"""Access to the monorepo build graph."""
