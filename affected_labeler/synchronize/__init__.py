"""Tag derivation and label synchronization."""
