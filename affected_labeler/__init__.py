"""Label pull requests with tags derived from the monorepo projects they affect."""
